"""Offline completion client.

Returns a canned answer with a flashcards block so the whole chat flow can
run locally without network access.
"""

from typing import ClassVar

from studyassist.chat.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Completion client that never calls a provider."""

    DEFAULT_RESPONSE: ClassVar[str] = (
        "Here is a quick revision set.\n\n"
        "```flashcards\n"
        '[{"question": "What is photosynthesis?", '
        '"answer": "The process plants use to turn light into chemical energy"}]\n'
        "```"
    )

    def __init__(self, response: str | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[dict[str, object]],
    ) -> str:
        _ = model, temperature, max_tokens, messages
        return self._response
