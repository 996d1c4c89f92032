import httpx

from studyassist.ingestion.exceptions import ParserError, ParserNetworkError
from studyassist.parsing.base import BaseDocumentParser


class HttpDocumentParser(BaseDocumentParser):
    """Sends the file to an external parsing service as multipart form data.

    The service answers ``{"content": "..."}`` on success.
    """

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout_seconds
        self._transport = transport

    def parse(self, data: bytes, file_name: str) -> str:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(self._url, files={"file": (file_name, data)})
        except httpx.HTTPError as exc:
            raise ParserNetworkError(f"Parser service unreachable: {exc}") from exc

        if not response.is_success:
            raise ParserError(
                f"Parser service returned {response.status_code}: {response.text[:200]}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParserError(f"Parser service returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ParserError("Parser response must be a JSON object")
        content = payload.get("content") or ""
        if not isinstance(content, str):
            raise ParserError("Parser response 'content' must be a string")
        return content
