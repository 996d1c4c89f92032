from studyassist.ingestion.dispatcher import ExtractionDispatcher
from studyassist.ingestion.formats import classify
from studyassist.ingestion.pipeline import IngestionContext, PipelineStep
from studyassist.ingestion.sanitizer import MAX_CONTENT_CHARS, sanitize
from studyassist.logging.logger import Log


class ClassifyStep(PipelineStep):
    def run(self, context: IngestionContext) -> IngestionContext:
        upload = context.upload
        context.format_tag = classify(upload.file_name, upload.declared_type)
        Log.debug(
            f"Classified upload as {context.format_tag.value}",
            file_name=upload.file_name,
            declared_type=upload.declared_type,
        )
        return context


class ExtractStep(PipelineStep):
    def __init__(self, dispatcher: ExtractionDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: IngestionContext) -> IngestionContext:
        context.extraction = self._dispatcher.extract(context.format_tag, context.upload)
        return context


class SanitizeStep(PipelineStep):
    def __init__(self, max_chars: int = MAX_CONTENT_CHARS) -> None:
        self._max_chars = max_chars

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.extraction is None:
            raise ValueError("IngestionContext.extraction must be set before sanitizing")
        context.content = sanitize(context.extraction.text, self._max_chars)
        removed = len(context.extraction.text) - len(context.content)
        if removed:
            Log.info(
                f"Sanitizer removed {removed} chars",
                file_name=context.upload.file_name,
            )
        return context
