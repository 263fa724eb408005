"""Chat turn and manual search request models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Message roles."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """Chat message."""

    role: MessageRole
    content: str


class ChatTurnRequest(BaseModel):
    """Payload of ``chat:message`` and ``POST /api/chat/message``."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1, description="Conversation so far, latest message last")
    model: str | None = Field(default=None, description="Gateway model id; server default when omitted")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    enable_web_search: bool = Field(default=False, alias="enableWebSearch")

    @property
    def latest_message(self) -> str:
        return self.messages[-1].content


class ManualSearchRequest(BaseModel):
    """Payload of ``search:deep`` and ``POST /api/search/*``."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1)
    max_results: int = Field(default=50, ge=1, alias="maxResults")
