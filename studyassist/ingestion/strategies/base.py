from abc import ABC, abstractmethod
from typing import ClassVar

from studyassist.ingestion.models import RawUpload, StrategyTag


class BaseExtractionStrategy(ABC):
    """Contract for a single way of turning uploaded bytes into text."""

    tag: ClassVar[StrategyTag]

    @abstractmethod
    def extract(self, upload: RawUpload) -> str:
        """Return the text contained in *upload*.

        Raises:
            ExtractionError: or any other exception, on failure. The dispatcher
                is responsible for containing it.
        """
