"""Health check and service banner endpoints."""

from fastapi import APIRouter

from searchstream import __version__
from searchstream.api.models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/api")
async def api_index() -> dict:
    """Describe the service and its endpoints."""
    return {
        "message": "SearchStream API",
        "version": __version__,
        "endpoints": {
            "health": "GET /health",
            "chat": {
                "message": "POST /api/chat/message",
                "models": "GET /api/chat/models",
                "validate": "POST /api/chat/validate",
            },
            "search": {
                "deep": "POST /api/search/deep",
                "quick": "POST /api/search/quick",
                "triggers": "GET /api/search/triggers?q=",
                "cache": "DELETE /api/search/cache",
            },
            "socket": ["chat:message", "search:deep", "models:get"],
        },
    }
