from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from studyassist.chat.artifacts import extract_artifacts
from studyassist.chat.client_base import BaseCompletionClient
from studyassist.chat.context import ContextAssembler
from studyassist.chat.models import (
    ArtifactExtraction,
    ConversationMessage,
    MindMap,
    ReferenceDocument,
)
from studyassist.logging.logger import Log


@dataclass(frozen=True)
class ChatRequest:
    message: str
    user_id: str | None = None
    exam_type: str | None = None
    language: str = "en"
    history: list[ConversationMessage] = field(default_factory=list)


class ChatService:
    """One chat turn: assemble prompt, call the completion service, extract artifacts."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        assembler: ContextAssembler,
        reference_loader: Callable[[str], Sequence[ReferenceDocument]],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> None:
        self._client = client
        self._assembler = assembler
        self._reference_loader = reference_loader
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    def respond(self, request: ChatRequest) -> ArtifactExtraction:
        """Run one chat turn.

        Raises:
            CompletionError: or a subclass, when the completion service fails.
            ConfigurationError: when the completion API key is missing.
        """
        reference_docs = self._reference_loader(request.user_id) if request.user_id else []
        prompt = self._assembler.assemble(
            request.exam_type,
            request.language,
            request.history,
            reference_docs,
            request.message,
        )
        Log.debug(
            "Chat prompt assembled",
            history=len(prompt.messages) - 1,
            reference_docs=len(reference_docs),
        )

        completion = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            messages=prompt.to_messages(),
        )
        Log.info("AI response received", chars=len(completion))

        result = extract_artifacts(completion)
        Log.info(
            "Chat turn complete",
            flashcards=len(result.flashcards or []),
            mindmap_nodes=_reachable_nodes(result.mindmap),
        )
        return result


def _reachable_nodes(mindmap: MindMap | None) -> int:
    if mindmap is None:
        return 0
    return sum(1 for _ in mindmap.walk())
