from abc import ABC, abstractmethod
from dataclasses import dataclass

from studyassist.ingestion.models import ExtractionResult, FormatTag, RawUpload


@dataclass(slots=True)
class IngestionContext:
    upload: RawUpload
    format_tag: FormatTag = FormatTag.UNKNOWN
    extraction: ExtractionResult | None = None
    content: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: IngestionContext) -> IngestionContext:
        raise NotImplementedError


class IngestionPipeline:
    """Runs the ingestion steps for one upload, in order."""

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def run(self, upload: RawUpload) -> IngestionContext:
        context = IngestionContext(upload=upload)
        for step in self._steps:
            context = step.run(context)
        return context
