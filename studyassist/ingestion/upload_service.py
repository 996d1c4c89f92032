import uuid
from collections.abc import Sequence

from studyassist.database.models import DocumentRecord
from studyassist.database.repositories.documents_repository import DocumentsRepository
from studyassist.ingestion.exceptions import UploadError
from studyassist.ingestion.formats import file_extension, resolve_extension
from studyassist.ingestion.models import RawUpload
from studyassist.ingestion.pipeline import IngestionPipeline
from studyassist.logging.logger import Log
from studyassist.storage.file_store import FileStore, upload_key


class UploadService:
    """Stores, extracts and persists uploads one file at a time.

    A batch is processed strictly in input order. When a file fails, the files
    before it stay persisted and the raised UploadError names the failing file.
    """

    def __init__(
        self,
        *,
        file_store: FileStore,
        pipeline: IngestionPipeline,
        doc_repo: DocumentsRepository,
    ) -> None:
        self._file_store = file_store
        self._pipeline = pipeline
        self._doc_repo = doc_repo

    def upload_batch(self, user_id: str, uploads: Sequence[RawUpload]) -> list[DocumentRecord]:
        records: list[DocumentRecord] = []
        for upload in uploads:
            try:
                records.append(self._upload_one(user_id, upload))
            except Exception as exc:
                Log.error(
                    "Upload failed",
                    user_id=user_id,
                    file_name=upload.file_name,
                    persisted=len(records),
                    error=str(exc),
                )
                raise UploadError(
                    upload.file_name, str(exc), [record.id for record in records]
                ) from exc
        Log.info(f"Uploaded {len(records)} documents", user_id=user_id)
        return records

    def list_documents(self, user_id: str) -> list[DocumentRecord]:
        """The user's documents, newest first."""
        return self._doc_repo.list_for_user(user_id)

    def delete_document(self, document_id: int) -> None:
        """Remove the stored object, then the document record.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        record = self._doc_repo.find_by_id(document_id)
        self._file_store.remove(record.file_path)
        self._doc_repo.delete(document_id)
        Log.info("Document deleted", document_id=document_id)

    def _upload_one(self, user_id: str, upload: RawUpload) -> DocumentRecord:
        key = upload_key(user_id, f"{uuid.uuid4().hex}-{_safe_name(upload.file_name)}")
        self._file_store.write(key, upload.data)
        try:
            context = self._pipeline.run(upload)
            file_type = resolve_extension(
                upload.file_name, upload.declared_type
            ) or file_extension(upload.file_name)
            record = self._doc_repo.insert(
                user_id=user_id,
                filename=upload.file_name,
                file_path=key,
                content=context.content,
                file_type=file_type,
            )
        except Exception:
            self._file_store.remove(key)
            raise
        Log.info(
            "Document persisted",
            document_id=record.id,
            file_name=upload.file_name,
            strategy=context.extraction.strategy_used.value if context.extraction else None,
        )
        return record


def _safe_name(file_name: str) -> str:
    base = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    return base or "upload"
