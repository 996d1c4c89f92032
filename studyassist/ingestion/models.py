from dataclasses import dataclass
from enum import Enum


class FormatTag(Enum):
    """Canonical format of an inbound upload."""

    DOCUMENT_PARSABLE = "document_parsable"
    IMAGE = "image"
    PLAIN_TEXT = "plain_text"
    UNKNOWN = "unknown"


class StrategyTag(Enum):
    """Extraction strategy that produced an ExtractionResult."""

    PARSER = "generic_parser"
    OCR = "ocr"
    PLAIN_TEXT = "plain_text"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RawUpload:
    """A single uploaded file, consumed once by the ingestion pipeline."""

    file_name: str
    data: bytes
    declared_type: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of the extraction dispatcher.

    ``text`` is always a string, possibly empty; ``succeeded`` is False
    whenever the primary strategy for the format did not produce the text.
    """

    text: str
    succeeded: bool
    strategy_used: StrategyTag
