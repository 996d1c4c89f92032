import pymupdf

from studyassist.ingestion.exceptions import ParserError
from studyassist.parsing.base import BaseDocumentParser


class PyMuPdfParser(BaseDocumentParser):
    """Parses PDF documents locally using PyMuPDF."""

    def parse(self, data: bytes, file_name: str) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise ParserError(f"pymupdf could not parse '{file_name}': {exc}") from exc
