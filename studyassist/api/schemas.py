from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProcessDocumentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)
    file_type: str | None = Field(default=None, alias="fileType")


class HistoryMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    exam_type: str | None = Field(default=None, alias="examType")
    conversation_history: list[HistoryMessage] = Field(
        default_factory=list, alias="conversationHistory"
    )
    user_id: str | None = Field(default=None, alias="userId")
    language: str = "en"


class LanguageUpdate(BaseModel):
    language: str = Field(min_length=2, max_length=8)
