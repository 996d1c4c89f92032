from collections.abc import Callable, Sequence
from dataclasses import asdict

import psycopg
from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studyassist.api.schemas import ChatRequestBody, LanguageUpdate, ProcessDocumentRequest
from studyassist.chat.context import ContextAssembler
from studyassist.chat.exceptions import CompletionError
from studyassist.chat.factory import CompletionClientFactory
from studyassist.chat.models import ArtifactExtraction, ConversationMessage, ReferenceDocument
from studyassist.chat.service import ChatRequest, ChatService
from studyassist.config.exceptions import ConfigurationError
from studyassist.config.settings import Settings
from studyassist.database.models import DocumentRecord
from studyassist.database.repositories.documents_repository import DocumentsRepository
from studyassist.database.repositories.profiles_repository import ProfilesRepository
from studyassist.ingestion.exceptions import DocumentNotFoundError, UploadError
from studyassist.ingestion.models import RawUpload
from studyassist.ingestion.processor import DocumentProcessor, build_file_store, build_pipeline
from studyassist.ingestion.upload_service import UploadService
from studyassist.logging.logger import Log

PROCESSED_MESSAGE = "Document processed successfully"


def create_app(
    settings: Settings,
    *,
    processor: DocumentProcessor,
    upload_service: UploadService,
    chat_service: ChatService,
    profiles_repo: ProfilesRepository,
) -> FastAPI:
    """Build the HTTP surface over already-wired services."""
    app = FastAPI(title="Study Assist API")
    origins = [o.strip() for o in settings.cors_allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = validation_message(exc)
        Log.warning("Rejected request", path=request.url.path, error=message)
        content: dict[str, object] = {"error": message}
        if request.url.path == "/process-document":
            content["content"] = ""
        return JSONResponse(status_code=500, content=content)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/process-document")
    def process_document(body: ProcessDocumentRequest) -> JSONResponse:
        try:
            content = processor.process(body.file_name, body.file_type)
        except Exception as exc:
            Log.error("Error processing document", file_name=body.file_name, error=str(exc))
            return JSONResponse(
                status_code=500,
                content={"error": str(exc) or "Unknown error", "content": ""},
            )
        return JSONResponse(content={"content": content, "message": PROCESSED_MESSAGE})

    @app.post("/chat")
    def chat(body: ChatRequestBody) -> JSONResponse:
        request = ChatRequest(
            message=body.message,
            user_id=body.user_id,
            exam_type=body.exam_type,
            language=body.language,
            history=[
                ConversationMessage(role=m.role, content=m.content)
                for m in body.conversation_history
            ],
        )
        try:
            result = chat_service.respond(request)
        except CompletionError as exc:
            Log.error("Chat completion failed", status=exc.status_code, error=str(exc))
            return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})
        except ConfigurationError as exc:
            Log.error("Chat is not configured", error=str(exc))
            return JSONResponse(status_code=500, content={"error": str(exc)})
        except Exception as exc:
            Log.error("Error in chat", error=str(exc))
            return JSONResponse(
                status_code=500,
                content={"error": str(exc) or "An unexpected error occurred"},
            )
        return JSONResponse(content=chat_payload(result))

    @app.post("/documents")
    def upload_documents(
        user_id: str = Form(...),
        files: list[UploadFile] = File(...),
    ) -> JSONResponse:
        uploads = [
            RawUpload(
                file_name=f.filename or "upload",
                data=f.file.read(),
                declared_type=f.content_type,
            )
            for f in files
        ]
        try:
            records = upload_service.upload_batch(user_id, uploads)
        except UploadError as exc:
            return JSONResponse(
                status_code=500,
                content={
                    "error": str(exc),
                    "failedFile": exc.file_name,
                    "persistedIds": exc.persisted_ids,
                },
            )
        return JSONResponse(
            content={
                "documents": [document_payload(r) for r in records],
                "message": "Documents uploaded successfully!",
            }
        )

    @app.get("/documents")
    def list_documents(user_id: str) -> JSONResponse:
        records = upload_service.list_documents(user_id)
        return JSONResponse(content={"documents": [document_payload(r) for r in records]})

    @app.delete("/documents/{document_id}")
    def delete_document(document_id: int) -> JSONResponse:
        try:
            upload_service.delete_document(document_id)
        except DocumentNotFoundError as exc:
            return JSONResponse(status_code=404, content={"error": str(exc)})
        return JSONResponse(content={"message": "Document deleted successfully!"})

    @app.get("/profiles/{user_id}/language")
    def get_language(user_id: str) -> dict[str, str]:
        return {"language": profiles_repo.get_preferred_language(user_id)}

    @app.put("/profiles/{user_id}/language")
    def update_language(user_id: str, body: LanguageUpdate) -> dict[str, str]:
        profiles_repo.update_preferred_language(user_id, body.language)
        return {"language": body.language}

    return app


def validation_message(exc: RequestValidationError) -> str:
    """First validation problem as ``field: reason``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")
    )
    reason = str(first.get("msg", "invalid"))
    return f"{location}: {reason}" if location else reason


def document_payload(record: DocumentRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "filename": record.filename,
        "fileType": record.file_type,
        "createdAt": record.created_at.isoformat() if record.created_at else None,
    }


def chat_payload(result: ArtifactExtraction) -> dict[str, object]:
    return {
        "response": result.display_text,
        "flashcards": [asdict(card) for card in result.flashcards]
        if result.flashcards
        else None,
        "mindmap": asdict(result.mindmap) if result.mindmap is not None else None,
    }


def reference_loader(
    doc_repo: DocumentsRepository,
) -> Callable[[str], Sequence[ReferenceDocument]]:
    """Reference documents for a user; a failed lookup means no references."""

    def load(user_id: str) -> Sequence[ReferenceDocument]:
        try:
            return doc_repo.list_reference_documents(user_id)
        except psycopg.Error as exc:
            Log.warning("Could not load reference documents", user_id=user_id, error=str(exc))
            return []

    return load


def build_app(settings: Settings) -> FastAPI:
    """Wire the production services from settings."""
    completion_client = CompletionClientFactory.create(settings)
    pipeline = build_pipeline(settings, completion_client)
    file_store = build_file_store(settings)
    doc_repo = DocumentsRepository()
    chat_service = ChatService(
        client=completion_client,
        assembler=ContextAssembler(history_window=settings.history_window),
        reference_loader=reference_loader(doc_repo),
        model=settings.completion_model_name,
        temperature=settings.completion_temperature,
        max_tokens=settings.completion_max_tokens,
    )
    return create_app(
        settings,
        processor=DocumentProcessor(file_store, pipeline),
        upload_service=UploadService(
            file_store=file_store,
            pipeline=pipeline,
            doc_repo=doc_repo,
        ),
        chat_service=chat_service,
        profiles_repo=ProfilesRepository(),
    )
