class ExtractionError(Exception):
    """Base exception for all extraction strategy failures."""


class ParserError(ExtractionError):
    """Raised when the document parser returns an unusable response."""


class ParserNetworkError(ParserError):
    """Raised when the document parser cannot be reached."""


class OcrError(ExtractionError):
    """Raised when OCR through the completion service fails."""


class UploadError(Exception):
    """Raised when one file of an upload batch fails.

    Documents persisted before the failing file are kept and listed in
    ``persisted_ids``.
    """

    def __init__(self, file_name: str, reason: str, persisted_ids: list[int]) -> None:
        super().__init__(f"Failed to upload '{file_name}': {reason}")
        self.file_name = file_name
        self.reason = reason
        self.persisted_ids = persisted_ids


class DocumentNotFoundError(Exception):
    """Raised when a document cannot be found in the database."""
