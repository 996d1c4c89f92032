from pathlib import Path

from studyassist.chat.client_base import BaseCompletionClient
from studyassist.config.settings import Settings
from studyassist.ingestion.dispatcher import ExtractionDispatcher
from studyassist.ingestion.models import RawUpload
from studyassist.ingestion.pipeline import IngestionPipeline
from studyassist.ingestion.retry import RetryPolicy
from studyassist.ingestion.steps import ClassifyStep, ExtractStep, SanitizeStep
from studyassist.ingestion.strategies import OcrStrategy, ParserStrategy
from studyassist.logging.logger import Log
from studyassist.parsing.factory import ParserFactory
from studyassist.storage.file_store import FileStore


class DocumentProcessor:
    """Ingestion call: read a stored upload and return its sanitized content.

    Pipeline: load -> classify -> extract -> sanitize.
    """

    def __init__(self, file_store: FileStore, pipeline: IngestionPipeline) -> None:
        self._file_store = file_store
        self._pipeline = pipeline

    def process(self, file_name: str, file_type: str | None = None) -> str:
        """Return the sanitized content of the stored object *file_name*.

        Raises:
            FileNotFoundError: if nothing is stored under *file_name*.
            StorageError: if *file_name* is not a valid storage key.
        """
        data = self._file_store.read(file_name)
        Log.info(f"Loaded {len(data)} bytes", file_name=file_name)
        context = self._pipeline.run(
            RawUpload(file_name=file_name, data=data, declared_type=file_type)
        )
        return context.content


def build_pipeline(settings: Settings, completion_client: BaseCompletionClient) -> IngestionPipeline:
    """Build the classify -> extract -> sanitize pipeline from settings."""
    dispatcher = ExtractionDispatcher(
        parser=ParserStrategy(ParserFactory.create(settings)),
        ocr=OcrStrategy(
            completion_client,
            model=settings.ocr_model_name,
            temperature=settings.ocr_temperature,
            max_tokens=settings.ocr_max_tokens,
        ),
        retry_policy=RetryPolicy(
            max_attempts=settings.parser_max_attempts,
            delay_seconds=settings.parser_retry_delay_seconds,
        ),
    )
    return IngestionPipeline(
        [
            ClassifyStep(),
            ExtractStep(dispatcher),
            SanitizeStep(settings.content_max_chars),
        ]
    )


def build_file_store(settings: Settings, files_root: Path | None = None) -> FileStore:
    return FileStore(files_root=files_root if files_root is not None else Path(settings.files_root))
