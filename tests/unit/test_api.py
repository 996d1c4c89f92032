from datetime import UTC, datetime
from unittest.mock import MagicMock

import psycopg
import pytest
from fastapi.testclient import TestClient

from studyassist.api.app import chat_payload, create_app, reference_loader
from studyassist.chat.exceptions import (
    CompletionError,
    CompletionQuotaError,
    CompletionRateLimitError,
)
from studyassist.chat.models import (
    ArtifactExtraction,
    Flashcard,
    MindMap,
    MindMapNode,
    ReferenceDocument,
)
from studyassist.chat.service import ChatService
from studyassist.config.exceptions import ConfigurationError
from studyassist.config.settings import Settings
from studyassist.database.models import DocumentRecord
from studyassist.database.repositories.documents_repository import DocumentsRepository
from studyassist.database.repositories.profiles_repository import ProfilesRepository
from studyassist.ingestion.exceptions import DocumentNotFoundError, UploadError
from studyassist.ingestion.processor import DocumentProcessor
from studyassist.ingestion.upload_service import UploadService


@pytest.fixture
def services() -> dict[str, MagicMock]:
    return {
        "processor": MagicMock(spec=DocumentProcessor),
        "upload_service": MagicMock(spec=UploadService),
        "chat_service": MagicMock(spec=ChatService),
        "profiles_repo": MagicMock(spec=ProfilesRepository),
    }


@pytest.fixture
def client(services: dict[str, MagicMock]) -> TestClient:
    return TestClient(create_app(Settings(), **services))


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


class TestProcessDocument:
    def test_success(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["processor"].process.return_value = "Extracted text"

        resp = client.post("/process-document", json={"fileName": "u1/a.pdf", "fileType": "pdf"})

        assert resp.status_code == 200
        assert resp.json() == {
            "content": "Extracted text",
            "message": "Document processed successfully",
        }
        services["processor"].process.assert_called_once_with("u1/a.pdf", "pdf")

    def test_failure_returns_empty_content(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        services["processor"].process.side_effect = FileNotFoundError("File not found: u1/a.pdf")

        resp = client.post("/process-document", json={"fileName": "u1/a.pdf"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "File not found: u1/a.pdf", "content": ""}

    def test_missing_file_name_returns_error_shape(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        resp = client.post("/process-document", json={"fileType": "pdf"})

        assert resp.status_code == 500
        body = resp.json()
        assert body["content"] == ""
        assert body["error"].startswith("fileName: ")
        assert "detail" not in body
        services["processor"].process.assert_not_called()


class TestChat:
    def test_success_payload(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["chat_service"].respond.return_value = ArtifactExtraction(
            display_text="Here.",
            flashcards=[Flashcard("Q", "A")],
            mindmap=None,
        )

        resp = client.post(
            "/chat",
            json={
                "message": "cards please",
                "examType": "jee",
                "userId": "u1",
                "conversationHistory": [{"role": "user", "content": "hi"}],
            },
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "response": "Here.",
            "flashcards": [{"question": "Q", "answer": "A"}],
            "mindmap": None,
        }
        request = services["chat_service"].respond.call_args.args[0]
        assert request.exam_type == "jee"
        assert request.language == "en"
        assert request.history[0].content == "hi"

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (CompletionRateLimitError("Rate limit exceeded."), 429),
            (CompletionQuotaError("AI service requires payment."), 402),
            (CompletionError("AI provider API error: 500"), 500),
            (ConfigurationError("COMPLETION_API_KEY is not configured"), 500),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_error_mapping(
        self,
        client: TestClient,
        services: dict[str, MagicMock],
        error: Exception,
        status: int,
    ) -> None:
        services["chat_service"].respond.side_effect = error

        resp = client.post("/chat", json={"message": "hi"})

        assert resp.status_code == status
        assert resp.json() == {"error": str(error)}

    def test_invalid_history_role_returns_error_shape(self, client: TestClient) -> None:
        resp = client.post(
            "/chat",
            json={"message": "hi", "conversationHistory": [{"role": "system", "content": "x"}]},
        )
        assert resp.status_code == 500
        assert list(resp.json()) == ["error"]
        assert resp.json()["error"].startswith("conversationHistory.0.role: ")

    def test_empty_message_is_forwarded(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        services["chat_service"].respond.return_value = ArtifactExtraction(display_text="Hello!")

        resp = client.post("/chat", json={"message": ""})

        assert resp.status_code == 200
        assert services["chat_service"].respond.call_args.args[0].message == ""


class TestDocuments:
    def test_list_newest_first(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["upload_service"].list_documents.return_value = [
            DocumentRecord(
                2, "u1", "b.pdf", "u1/y-b.pdf", "beta", "pdf", datetime(2026, 3, 2, tzinfo=UTC)
            ),
            DocumentRecord(1, "u1", "a.txt", "u1/x-a.txt", "alpha", "txt"),
        ]

        resp = client.get("/documents", params={"user_id": "u1"})

        assert resp.status_code == 200
        assert resp.json() == {
            "documents": [
                {
                    "id": 2,
                    "filename": "b.pdf",
                    "fileType": "pdf",
                    "createdAt": "2026-03-02T00:00:00+00:00",
                },
                {"id": 1, "filename": "a.txt", "fileType": "txt", "createdAt": None},
            ]
        }
        services["upload_service"].list_documents.assert_called_once_with("u1")

    def test_list_requires_user_id(self, client: TestClient) -> None:
        resp = client.get("/documents")
        assert resp.status_code == 500
        assert resp.json() == {"error": "user_id: Field required"}

    def test_upload_batch(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["upload_service"].upload_batch.return_value = [
            DocumentRecord(1, "u1", "a.txt", "u1/x-a.txt", "alpha", "txt"),
            DocumentRecord(2, "u1", "b.png", "u1/y-b.png", "beta", "png"),
        ]

        resp = client.post(
            "/documents",
            data={"user_id": "u1"},
            files=[
                ("files", ("a.txt", b"alpha", "text/plain")),
                ("files", ("b.png", b"\x89PNG", "image/png")),
            ],
        )

        assert resp.status_code == 200
        assert [d["id"] for d in resp.json()["documents"]] == [1, 2]
        user_id, uploads = services["upload_service"].upload_batch.call_args.args
        assert user_id == "u1"
        assert [u.file_name for u in uploads] == ["a.txt", "b.png"]
        assert uploads[0].data == b"alpha"
        assert uploads[1].declared_type == "image/png"

    def test_upload_failure_names_file(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        services["upload_service"].upload_batch.side_effect = UploadError(
            "b.pdf", "disk full", [1]
        )

        resp = client.post(
            "/documents",
            data={"user_id": "u1"},
            files=[("files", ("b.pdf", b"%PDF", "application/pdf"))],
        )

        assert resp.status_code == 500
        assert resp.json()["failedFile"] == "b.pdf"
        assert resp.json()["persistedIds"] == [1]

    def test_delete(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        resp = client.delete("/documents/5")
        assert resp.status_code == 200
        services["upload_service"].delete_document.assert_called_once_with(5)

    def test_delete_missing(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["upload_service"].delete_document.side_effect = DocumentNotFoundError(
            "Document 5 not found"
        )
        resp = client.delete("/documents/5")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Document 5 not found"}


class TestProfiles:
    def test_get_language(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        services["profiles_repo"].get_preferred_language.return_value = "hi"
        assert client.get("/profiles/u1/language").json() == {"language": "hi"}

    def test_update_language(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        resp = client.put("/profiles/u1/language", json={"language": "es"})
        assert resp.status_code == 200
        services["profiles_repo"].update_preferred_language.assert_called_once_with("u1", "es")


class TestHelpers:
    def test_chat_payload_serializes_mindmap(self) -> None:
        mindmap = MindMap("Energy", [MindMapNode("1", "Energy", "Work", ["2"])])
        payload = chat_payload(ArtifactExtraction("text", None, mindmap))
        assert payload["flashcards"] is None
        assert payload["mindmap"] == {
            "topic": "Energy",
            "nodes": [{"id": "1", "label": "Energy", "details": "Work", "children": ["2"]}],
        }

    def test_reference_loader_returns_documents(self) -> None:
        repo = MagicMock(spec=DocumentsRepository)
        repo.list_reference_documents.return_value = [ReferenceDocument("a.txt", "alpha")]
        assert reference_loader(repo)("u1") == [ReferenceDocument("a.txt", "alpha")]

    def test_reference_loader_tolerates_database_errors(self) -> None:
        repo = MagicMock(spec=DocumentsRepository)
        repo.list_reference_documents.side_effect = psycopg.OperationalError("down")
        assert reference_loader(repo)("u1") == []
