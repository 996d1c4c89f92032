"""Selects and sequences extraction strategies per format.

Policy:

* DOCUMENT_PARSABLE: parser under the retry policy, then fallback decode.
* IMAGE: OCR, then fallback decode.
* PLAIN_TEXT: direct decode, no external call.
* UNKNOWN: parser once; empty output or failure falls back to decode.

``extract`` never raises. Every failure ends in a fallback result.
"""

from typing import assert_never

from studyassist.ingestion.models import ExtractionResult, FormatTag, RawUpload
from studyassist.ingestion.retry import NO_RETRY, RetryPolicy
from studyassist.ingestion.strategies import (
    BaseExtractionStrategy,
    FallbackDecodeStrategy,
    PlainTextStrategy,
)
from studyassist.logging.logger import Log


class ExtractionDispatcher:
    """Routes an upload to the extraction strategy for its format."""

    def __init__(
        self,
        *,
        parser: BaseExtractionStrategy,
        ocr: BaseExtractionStrategy,
        plain_text: BaseExtractionStrategy | None = None,
        fallback: BaseExtractionStrategy | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._parser = parser
        self._ocr = ocr
        self._plain_text = plain_text or PlainTextStrategy()
        self._fallback = fallback or FallbackDecodeStrategy()
        self._retry_policy = retry_policy or RetryPolicy()

    def extract(self, tag: FormatTag, upload: RawUpload) -> ExtractionResult:
        match tag:
            case FormatTag.DOCUMENT_PARSABLE:
                return self._attempt(self._parser, upload, self._retry_policy)
            case FormatTag.IMAGE:
                return self._attempt(self._ocr, upload, NO_RETRY)
            case FormatTag.PLAIN_TEXT:
                return self._attempt(self._plain_text, upload, NO_RETRY)
            case FormatTag.UNKNOWN:
                return self._attempt(self._parser, upload, NO_RETRY, require_content=True)
            case _:
                assert_never(tag)

    def _attempt(
        self,
        strategy: BaseExtractionStrategy,
        upload: RawUpload,
        policy: RetryPolicy,
        *,
        require_content: bool = False,
    ) -> ExtractionResult:
        try:
            text = policy.run(
                lambda: strategy.extract(upload),
                label=f"{strategy.tag.value} extraction of '{upload.file_name}'",
            )
        except Exception as exc:
            Log.warning(
                f"{strategy.tag.value} extraction failed, using fallback decode",
                file_name=upload.file_name,
                error=str(exc),
            )
            return self._degrade(upload)

        if require_content and not text:
            Log.info(
                f"{strategy.tag.value} extraction returned no content, using fallback decode",
                file_name=upload.file_name,
            )
            return self._degrade(upload)

        Log.info(
            f"Extracted {len(text)} chars with {strategy.tag.value}",
            file_name=upload.file_name,
        )
        return ExtractionResult(text=text or "", succeeded=True, strategy_used=strategy.tag)

    def _degrade(self, upload: RawUpload) -> ExtractionResult:
        try:
            text = self._fallback.extract(upload)
        except Exception as exc:
            Log.error(
                "Fallback decode failed, returning empty text",
                file_name=upload.file_name,
                error=str(exc),
            )
            text = ""
        return ExtractionResult(
            text=text or "",
            succeeded=False,
            strategy_used=self._fallback.tag,
        )
