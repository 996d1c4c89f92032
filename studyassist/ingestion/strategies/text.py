from studyassist.ingestion.models import RawUpload, StrategyTag
from studyassist.ingestion.strategies.base import BaseExtractionStrategy


def decode_bytes(data: bytes) -> str:
    """Decode as UTF-8, replacing undecodable sequences. Never raises for bytes."""
    return data.decode("utf-8", errors="replace")


class PlainTextStrategy(BaseExtractionStrategy):
    """Reads a text file directly; a UTF-8 BOM is dropped."""

    tag = StrategyTag.PLAIN_TEXT

    def extract(self, upload: RawUpload) -> str:
        return decode_bytes(upload.data.removeprefix(b"\xef\xbb\xbf"))


class FallbackDecodeStrategy(BaseExtractionStrategy):
    """Best-effort byte-to-text decode used when every other strategy failed.

    For binary formats the result is usually garbage or empty; sanitization
    strips most of it.
    """

    tag = StrategyTag.FALLBACK

    def extract(self, upload: RawUpload) -> str:
        return decode_bytes(upload.data)
