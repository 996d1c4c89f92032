from unittest.mock import MagicMock, patch

import pytest

from studyassist.chat.client_base import BaseCompletionClient
from studyassist.chat.context import ContextAssembler
from studyassist.chat.exceptions import CompletionRateLimitError
from studyassist.chat.models import ConversationMessage, ReferenceDocument
from studyassist.chat.service import ChatRequest, ChatService

TEMPLATE = "Tutor{exam_clause}."


def _service(client: MagicMock, loader: MagicMock | None = None) -> ChatService:
    return ChatService(
        client=client,
        assembler=ContextAssembler(template=TEMPLATE),
        reference_loader=loader or MagicMock(return_value=[]),
        model="gpt-test",
        temperature=0.5,
        max_tokens=100,
    )


class TestChatService:
    def test_returns_extracted_artifacts(self) -> None:
        client = MagicMock(spec=BaseCompletionClient)
        client.create_chat_completion.return_value = (
            'Sure.\n\n```flashcards\n[{"question": "Q", "answer": "A"}]\n```'
        )
        result = _service(client).respond(ChatRequest(message="Make cards"))

        assert result.flashcards is not None
        assert result.flashcards[0].answer == "A"
        assert result.display_text.startswith("Sure.")
        assert "```" not in result.display_text

    def test_passes_assembled_messages_and_settings(self) -> None:
        client = MagicMock(spec=BaseCompletionClient)
        client.create_chat_completion.return_value = "ok"
        loader = MagicMock(return_value=[ReferenceDocument("notes.txt", "Cells divide.")])
        request = ChatRequest(
            message="Explain mitosis",
            user_id="u1",
            exam_type="neet",
            language="fr",
            history=[ConversationMessage("user", "hello"), ConversationMessage("assistant", "hi")],
        )

        _service(client, loader).respond(request)

        loader.assert_called_once_with("u1")
        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 100
        messages = kwargs["messages"]
        assert messages[0]["role"] == "system"
        assert messages[0]["content"].startswith("Tutor for NEET.")
        assert "Respond in French" in messages[0]["content"]
        assert "--- notes.txt ---\nCells divide." in messages[0]["content"]
        assert [m["content"] for m in messages[1:]] == ["hello", "hi", "Explain mitosis"]

    def test_skips_reference_lookup_without_user(self) -> None:
        client = MagicMock(spec=BaseCompletionClient)
        client.create_chat_completion.return_value = "ok"
        loader = MagicMock()

        result = _service(client, loader).respond(ChatRequest(message="hi"))

        loader.assert_not_called()
        assert result.display_text == "ok"
        assert result.flashcards is None
        assert result.mindmap is None

    def test_completion_errors_propagate(self) -> None:
        client = MagicMock(spec=BaseCompletionClient)
        client.create_chat_completion.side_effect = CompletionRateLimitError("slow down")
        with pytest.raises(CompletionRateLimitError):
            _service(client).respond(ChatRequest(message="hi"))

    def test_logs_reachable_mindmap_nodes(self) -> None:
        client = MagicMock(spec=BaseCompletionClient)
        client.create_chat_completion.return_value = (
            "```mindmap\n"
            '{"topic": "Cells", "nodes": ['
            '{"id": "1", "label": "Cell", "children": ["2", "9"]},'
            '{"id": "2", "label": "Nucleus", "children": ["1"]},'
            '{"id": "3", "label": "Orphan"}]}\n'
            "```"
        )

        with patch("studyassist.chat.service.Log") as mock_log:
            result = _service(client).respond(ChatRequest(message="map it"))

        assert result.mindmap is not None
        completed = [
            c for c in mock_log.info.call_args_list if c.args[0] == "Chat turn complete"
        ]
        assert completed[0].kwargs == {"flashcards": 0, "mindmap_nodes": 2}
