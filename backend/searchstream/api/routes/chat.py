"""Non-streaming chat endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Request

from searchstream.api.models.chat import ChatTurnRequest
from searchstream.config.settings import Settings
from searchstream.llm.base import GenerationError, GenerationOptions, GenerationProvider

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/message")
async def send_message(request: Request, body: ChatTurnRequest) -> dict:
    """Generate a full answer in one response."""
    settings: Settings = request.app.state.settings
    generator: GenerationProvider = request.app.state.generator

    model = body.model or settings.default_model
    options = GenerationOptions(
        temperature=body.temperature or settings.default_temperature,
        max_tokens=body.max_tokens or settings.default_max_tokens,
    )

    try:
        message = await generator.chat_completion(model, body.messages, options)
    except GenerationError as e:
        logger.error("Chat completion failed", model=model, error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e

    return {"success": True, "data": {"message": message, "model": model}}


@router.get("/models")
async def list_models(request: Request) -> dict:
    """List the models the gateway serves."""
    generator: GenerationProvider = request.app.state.generator
    models = [model.model_dump() for model in generator.available_models()]
    return {"success": True, "data": {"models": models}}


@router.post("/validate")
async def validate_connection(request: Request) -> dict:
    """Check that the gateway is reachable with the configured key."""
    settings: Settings = request.app.state.settings
    generator: GenerationProvider = request.app.state.generator
    connected = await generator.validate_connection()
    return {"success": True, "data": {"connected": connected, "baseUrl": settings.gateway_base_url}}
