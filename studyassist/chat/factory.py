from typing import ClassVar

from studyassist.chat.client_base import BaseCompletionClient
from studyassist.chat.example_client_adapter import ExampleClientAdapter
from studyassist.chat.openai_client_adapter import OpenAIClientAdapter
from studyassist.config.settings import Settings


class CompletionClientFactory:
    """Creates the configured completion client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseCompletionClient:
        """Create a completion client from application settings.

        The API key is checked per call, so a missing key surfaces as a
        configuration error on the paths that need it rather than at start-up.
        """
        provider = settings.completion_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.completion_api_key,
            timeout_seconds=settings.completion_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.completion_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.completion_base_url.strip()
            if not url:
                raise ValueError(
                    "completion_base_url is required for completion_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown completion provider '{provider}'. Choose from: {supported}")
