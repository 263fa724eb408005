"""Socket.IO server for real-time chat streaming."""

import asyncio
from typing import Any, Dict, Set

import socketio
import structlog
from pydantic import ValidationError

from searchstream.api.models.chat import ChatTurnRequest, ManualSearchRequest
from searchstream.chat.turn import ChatTurnCoordinator
from searchstream.llm.base import GenerationProvider
from searchstream.search.aggregator import DeepSearchService
from searchstream.search.models import DeepSearchOptions, SearchDepth
from searchstream.streaming.socketio_stream import SocketIOChatStream

logger = structlog.get_logger(__name__)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0] if error.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


class ChatSocketServer:
    """Socket.IO event handlers for chat turns and manual searches.

    Every accepted request runs as a task owned by the client's sid;
    disconnecting cancels all of them.
    """

    def __init__(self, state: Any, cors_allowed_origins: str | list[str] = "*"):
        """
        Args:
            state: Application state holding ``coordinator``, ``deep_search``
                and ``generator``; read on each event so services built in the
                app lifespan are picked up
            cors_allowed_origins: Origins accepted by the Engine.IO handshake
        """
        self.state = state
        self.sio = socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=cors_allowed_origins,
            logger=False,
            engineio_logger=False,
            ping_timeout=60,
            ping_interval=25,
        )
        self.active_tasks: Dict[str, Set[asyncio.Task]] = {}

        self.sio.on("connect", self.handle_connect)
        self.sio.on("disconnect", self.handle_disconnect)
        self.sio.on("chat:message", self.handle_chat_message)
        self.sio.on("search:deep", self.handle_deep_search)
        self.sio.on("models:get", self.handle_models_get)

    @property
    def coordinator(self) -> ChatTurnCoordinator:
        return self.state.coordinator

    @property
    def deep_search(self) -> DeepSearchService:
        return self.state.deep_search

    @property
    def generator(self) -> GenerationProvider:
        return self.state.generator

    def get_asgi_app(self, other_asgi_app: Any = None) -> socketio.ASGIApp:
        return socketio.ASGIApp(self.sio, other_asgi_app=other_asgi_app)

    def _track(self, sid: str, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        tasks = self.active_tasks.setdefault(sid, set())
        tasks.add(task)

        def _done(finished: asyncio.Task) -> None:
            tasks.discard(finished)
            if finished.cancelled():
                return
            error = finished.exception()
            if error is not None:
                logger.error("Socket.IO task failed", sid=sid, error=str(error), error_type=type(error).__name__)

        task.add_done_callback(_done)
        return task

    async def handle_connect(self, sid: str, environ: Dict[str, Any], auth: Any = None) -> None:
        """Handle client connection."""
        logger.info("Socket.IO client connected", sid=sid)

    async def handle_disconnect(self, sid: str, *args: Any) -> None:
        """Handle client disconnect by cancelling everything it started."""
        tasks = self.active_tasks.pop(sid, set())
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        logger.info("Socket.IO client disconnected", sid=sid, cancelled_tasks=len(pending))

    async def handle_chat_message(self, sid: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Handle a chat turn request."""
        try:
            request = ChatTurnRequest.model_validate(data or {})
        except ValidationError as e:
            message = _validation_message(e)
            logger.warning("Rejected chat message", sid=sid, error=message)
            await self.sio.emit("chat:error", {"message": message}, to=sid)
            return {"error": message}

        logger.info(
            "Received chat message",
            sid=sid,
            model=request.model,
            messages=len(request.messages),
            enable_web_search=request.enable_web_search,
        )

        stream = SocketIOChatStream(sid, self.sio)
        self._track(sid, self.coordinator.run_turn(request, stream))
        return {"status": "accepted"}

    async def handle_deep_search(self, sid: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Handle a manual deep search request."""
        try:
            request = ManualSearchRequest.model_validate(data or {})
        except ValidationError as e:
            message = _validation_message(e)
            logger.warning("Rejected deep search request", sid=sid, error=message)
            await self.sio.emit("search:error", {"message": message}, to=sid)
            return {"error": message}

        stream = SocketIOChatStream(sid, self.sio)
        self._track(sid, self._run_manual_search(request, stream))
        return {"status": "accepted"}

    async def _run_manual_search(self, request: ManualSearchRequest, stream: SocketIOChatStream) -> None:
        await stream.emit_search_start(request.query, mode=SearchDepth.DEEP.value)
        options = DeepSearchOptions(max_results=request.max_results, search_depth=SearchDepth.EXPERT)
        try:
            response = await self.deep_search.deep_search(request.query, options)
        except Exception as e:
            logger.error("Manual deep search failed", query=request.query, error=str(e))
            await stream.emit_search_error(str(e) or "Deep search failed")
            return
        await stream.emit_search_results(response)

    async def handle_models_get(self, sid: str, data: Any = None) -> None:
        """Send the model catalog."""
        models = [model.model_dump() for model in self.generator.available_models()]
        await self.sio.emit("models:list", {"models": models}, to=sid)
