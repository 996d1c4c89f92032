import base64

from studyassist.chat.client_base import BaseCompletionClient
from studyassist.chat.exceptions import CompletionError
from studyassist.ingestion.exceptions import OcrError
from studyassist.ingestion.formats import image_mime_type
from studyassist.ingestion.models import RawUpload, StrategyTag
from studyassist.ingestion.strategies.base import BaseExtractionStrategy

OCR_SYSTEM_PROMPT = (
    "You are an OCR engine. Extract all visible text from the provided image. "
    "Return plain UTF-8 text only with reasonable line breaks. No extra commentary."
)
OCR_USER_PROMPT = "Extract all text from this image. Return only the text."


class OcrStrategy(BaseExtractionStrategy):
    """Reads text out of an image with a multimodal completion model."""

    tag = StrategyTag.OCR

    def __init__(
        self,
        client: BaseCompletionClient,
        *,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 2000,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    def extract(self, upload: RawUpload) -> str:
        try:
            return self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                messages=self.build_messages(upload),
            )
        except CompletionError as exc:
            raise OcrError(f"OCR failed for '{upload.file_name}': {exc}") from exc

    @staticmethod
    def build_messages(upload: RawUpload) -> list[dict[str, object]]:
        mime = image_mime_type(upload.file_name, upload.declared_type)
        encoded = base64.b64encode(upload.data).decode("ascii")
        return [
            {"role": "system", "content": OCR_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": OCR_USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{encoded}"}},
                ],
            },
        ]
