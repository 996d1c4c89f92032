import httpx
import openai

from studyassist.chat.client_base import BaseCompletionClient
from studyassist.chat.exceptions import (
    CompletionError,
    CompletionNetworkError,
    CompletionQuotaError,
    CompletionRateLimitError,
)
from studyassist.config.exceptions import ConfigurationError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = openai.OpenAI(
            api_key=api_key or "missing",
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[dict[str, object]],
    ) -> str:
        if not self._api_key:
            raise ConfigurationError("COMPLETION_API_KEY is not configured")
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,  # type: ignore[arg-type]
            )
        except openai.RateLimitError as exc:
            raise CompletionRateLimitError(
                "Rate limit exceeded. Please try again in a moment."
            ) from exc
        except openai.APIStatusError as exc:
            if exc.status_code == 402:
                raise CompletionQuotaError(
                    "AI service requires payment. Please contact support."
                ) from exc
            raise CompletionError(f"AI provider API error: {exc.status_code}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise CompletionError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise CompletionError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise CompletionError("AI returned empty response")
        return content
