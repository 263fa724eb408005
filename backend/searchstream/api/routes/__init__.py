"""API routes."""

from searchstream.api.routes.chat import router as chat_router
from searchstream.api.routes.health import router as health_router
from searchstream.api.routes.search import router as search_router

__all__ = [
    "health_router",
    "chat_router",
    "search_router",
]
