from studyassist.config.settings import Settings
from studyassist.parsing.base import BaseDocumentParser
from studyassist.parsing.http_adapter import HttpDocumentParser
from studyassist.parsing.pdfplumber_adapter import PdfPlumberParser
from studyassist.parsing.pymupdf_adapter import PyMuPdfParser


class ParserFactory:
    """Creates the document parser selected by ``parser_engine``."""

    ENGINES = ("http", "pdfplumber", "pymupdf")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentParser:
        engine = settings.parser_engine.lower()
        if engine == "http":
            return HttpDocumentParser(
                url=settings.parser_url,
                timeout_seconds=settings.parser_timeout_seconds,
            )
        if engine == "pdfplumber":
            return PdfPlumberParser()
        if engine == "pymupdf":
            return PyMuPdfParser()
        raise ValueError(f"Unknown parser engine '{engine}'. Choose from: {list(cls.ENGINES)}")
