from studyassist.ingestion.strategies.base import BaseExtractionStrategy
from studyassist.ingestion.strategies.ocr import OcrStrategy
from studyassist.ingestion.strategies.parser import ParserStrategy
from studyassist.ingestion.strategies.text import FallbackDecodeStrategy, PlainTextStrategy

__all__ = [
    "BaseExtractionStrategy",
    "FallbackDecodeStrategy",
    "OcrStrategy",
    "ParserStrategy",
    "PlainTextStrategy",
]
