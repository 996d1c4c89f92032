from abc import ABC, abstractmethod


class BaseDocumentParser(ABC):
    """Contract for all document parsing adapters."""

    @abstractmethod
    def parse(self, data: bytes, file_name: str) -> str:
        """Extract plain text from a document.

        Args:
            data: Raw file content.
            file_name: Original file name, used by parsers that sniff the format.

        Returns:
            Extracted text, possibly empty.

        Raises:
            ParserError: if the parser cannot produce text for any reason.
        """
