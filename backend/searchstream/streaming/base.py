"""Chat turn event stream."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict

import structlog

from searchstream.search.models import SearchResponse

logger = structlog.get_logger(__name__)


class StreamEventType(str, Enum):
    """Events sent to the client during a chat turn."""

    SEARCH_START = "search:start"
    SEARCH_RESULTS = "search:results"
    SEARCH_ERROR = "search:error"
    CHAT_START = "chat:start"
    CHAT_CHUNK = "chat:chunk"
    CHAT_ERROR = "chat:error"
    CHAT_COMPLETE = "chat:complete"


class ChatStream(ABC):
    """Delivers turn events to one client.

    Every ``emit_*`` call is awaited, so events from one branch reach the
    transport in the order they were produced.
    """

    def __init__(self) -> None:
        self._event_count = 0

    @abstractmethod
    async def _send(self, event: str, data: Dict[str, Any]) -> None:
        pass

    async def _emit(self, event_type: StreamEventType, data: Dict[str, Any]) -> None:
        self._event_count += 1
        await self._send(event_type.value, data)

    async def emit_search_start(self, query: str, mode: str = "deep") -> None:
        await self._emit(StreamEventType.SEARCH_START, {"query": query, "mode": mode})

    async def emit_search_results(self, response: SearchResponse) -> None:
        payload = response.to_payload()
        payload.pop("timestamp", None)
        await self._emit(StreamEventType.SEARCH_RESULTS, payload)

    async def emit_search_error(self, message: str) -> None:
        await self._emit(StreamEventType.SEARCH_ERROR, {"message": message})

    async def emit_chat_start(self, model: str) -> None:
        await self._emit(StreamEventType.CHAT_START, {"model": model})

    async def emit_chunk(self, content: str) -> None:
        await self._emit(StreamEventType.CHAT_CHUNK, {"content": content})

    async def emit_chat_error(self, message: str) -> None:
        await self._emit(StreamEventType.CHAT_ERROR, {"message": message})

    async def emit_complete(self) -> None:
        await self._emit(StreamEventType.CHAT_COMPLETE, {})
        logger.debug("Chat stream completed", total_events=self._event_count)
