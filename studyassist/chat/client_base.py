from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[dict[str, object]],
    ) -> str:
        """Return the assistant message text.

        ``messages`` uses the OpenAI chat format; a message ``content`` may be a
        string or a list of multimodal parts.

        Raises:
            CompletionError: or one of its subclasses, on any failure.
            ConfigurationError: if the client is missing its API key.
        """
