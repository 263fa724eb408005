"""API request and response models."""

from searchstream.api.models.chat import ChatMessage, ChatTurnRequest, ManualSearchRequest, MessageRole
from searchstream.api.models.health import HealthResponse

__all__ = [
    "ChatMessage",
    "ChatTurnRequest",
    "HealthResponse",
    "ManualSearchRequest",
    "MessageRole",
]
