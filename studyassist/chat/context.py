"""Builds the prompt sent to the completion service for one chat turn."""

from collections.abc import Sequence

from studyassist.chat.models import ConversationMessage, Prompt, ReferenceDocument
from studyassist.chat.prompt_loader import load_system_prompt_template

HISTORY_WINDOW = 10

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "hi": "Hindi",
    "zh": "Chinese",
    "ja": "Japanese",
    "ar": "Arabic",
    "pt": "Portuguese",
    "ru": "Russian",
}

REFERENCE_HEADER = "REFERENCE MATERIALS:"


def language_name(code: str) -> str:
    """Human name of a language code; unknown codes map to English."""
    return LANGUAGE_NAMES.get(code.strip().lower(), "English")


class ContextAssembler:
    """Assembles system instructions, the trailing history window and the new message."""

    def __init__(
        self,
        *,
        template: str | None = None,
        history_window: int = HISTORY_WINDOW,
    ) -> None:
        self._template = template if template is not None else load_system_prompt_template()
        self._history_window = history_window

    def assemble(
        self,
        exam_type: str | None,
        language: str,
        history: Sequence[ConversationMessage],
        reference_docs: Sequence[ReferenceDocument],
        user_message: str,
    ) -> Prompt:
        system = self._template.format(exam_clause=self._exam_clause(exam_type)).rstrip()
        system += self._language_directive(language)
        system += self._reference_section(reference_docs)

        window = list(history)[-self._history_window :] if self._history_window > 0 else []
        messages = [*window, ConversationMessage(role="user", content=user_message)]
        return Prompt(system=system, messages=messages)

    @staticmethod
    def _exam_clause(exam_type: str | None) -> str:
        if not exam_type or not exam_type.strip():
            return ""
        return f" for {exam_type.strip().upper()}"

    @staticmethod
    def _language_directive(language: str) -> str:
        if not language or language.strip().lower() == "en":
            return ""
        return (
            f"\n\nIMPORTANT: Respond in {language_name(language)}. All your responses "
            "should be in this language unless the user specifically requests otherwise."
        )

    @staticmethod
    def _reference_section(reference_docs: Sequence[ReferenceDocument]) -> str:
        if not reference_docs:
            return ""
        parts = [f"\n--- {doc.filename} ---\n{doc.content}" for doc in reference_docs]
        return f"\n\n{REFERENCE_HEADER}\n" + "\n".join(parts)
