"""Socket.IO chat stream."""

from typing import Any, Dict

import socketio
import structlog

from searchstream.streaming.base import ChatStream

logger = structlog.get_logger(__name__)


class SocketIOChatStream(ChatStream):
    """Sends turn events to a single Socket.IO client."""

    def __init__(self, sid: str, sio: socketio.AsyncServer):
        """
        Args:
            sid: Socket.IO session ID
            sio: Socket.IO server instance
        """
        super().__init__()
        self.sid = sid
        self.sio = sio

    async def _send(self, event: str, data: Dict[str, Any]) -> None:
        try:
            await self.sio.emit(event, data, to=self.sid)
            logger.debug("Emitted Socket.IO event", sid=self.sid, event_type=event, event_count=self._event_count)
        except Exception as e:
            # A dead connection must not abort the turn; the disconnect handler cancels it.
            logger.error("Failed to emit Socket.IO event", sid=self.sid, event_type=event, error=str(e))
