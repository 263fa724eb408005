"""FastAPI application initialization and configuration."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from searchstream import __version__
from searchstream.api.routes import chat_router, health_router, search_router
from searchstream.api.socketio_server import ChatSocketServer
from searchstream.chat.turn import ChatTurnCoordinator
from searchstream.config.logging_config import configure_logging
from searchstream.config.settings import Settings, get_settings
from searchstream.llm.base import GenerationOptions
from searchstream.llm.gateway import GatewayGenerationProvider
from searchstream.search.factory import create_search_services

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.

    Builds the search services, the generation provider and the turn
    coordinator once and stores them on ``app.state``.
    """
    settings: Settings = app.state.settings
    logger.info("Starting up SearchStream API...", search_mode=settings.search_mode, llm_mode=settings.llm_mode)

    logger.info("Initializing search services...")
    deep_search, web_search = create_search_services(settings)
    app.state.deep_search = deep_search
    app.state.web_search = web_search

    logger.info("Initializing generation provider...", base_url=settings.gateway_base_url)
    generator = GatewayGenerationProvider(settings)
    app.state.generator = generator

    app.state.coordinator = ChatTurnCoordinator(
        deep_search=deep_search,
        generator=generator,
        default_model=settings.default_model,
        default_options=GenerationOptions(
            temperature=settings.default_temperature,
            max_tokens=settings.default_max_tokens,
        ),
        deep_search_max_results=settings.deep_search_max_results,
        citation_limit=settings.citation_limit,
    )

    logger.info("SearchStream API started successfully", port=settings.api_port)

    yield

    logger.info("Shutting down SearchStream API...")
    deep_search.clear_cache()
    web_search.clear_cache()
    logger.info("SearchStream API shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(debug_mode=settings.debug_mode, log_level=settings.log_level)

    app = FastAPI(
        title="SearchStream API",
        description="Streaming chat with parallel multi-source web search",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.cors_origins == "*" else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(chat_router)
    app.include_router(search_router)

    app.state.socket_server = ChatSocketServer(app.state, cors_allowed_origins=settings.cors_origins)

    logger.info("FastAPI app created")

    return app


# Create app instance
app = create_app()
asgi_app = app.state.socket_server.get_asgi_app(app)
