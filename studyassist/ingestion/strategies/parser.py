from studyassist.ingestion.models import RawUpload, StrategyTag
from studyassist.ingestion.strategies.base import BaseExtractionStrategy
from studyassist.parsing.base import BaseDocumentParser


class ParserStrategy(BaseExtractionStrategy):
    """Delegates to the configured document parser."""

    tag = StrategyTag.PARSER

    def __init__(self, parser: BaseDocumentParser) -> None:
        self._parser = parser

    def extract(self, upload: RawUpload) -> str:
        return self._parser.parse(upload.data, upload.file_name)
