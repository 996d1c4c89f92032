import io

import pdfplumber

from studyassist.ingestion.exceptions import ParserError
from studyassist.parsing.base import BaseDocumentParser


class PdfPlumberParser(BaseDocumentParser):
    """Parses PDF documents locally using pdfplumber."""

    def parse(self, data: bytes, file_name: str) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise ParserError(f"pdfplumber could not parse '{file_name}': {exc}") from exc
