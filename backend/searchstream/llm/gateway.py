"""OpenAI-compatible LLM gateway provider."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import aiohttp
import structlog

from searchstream.api.models.chat import ChatMessage
from searchstream.config.settings import Settings
from searchstream.llm.base import GenerationError, GenerationOptions, GenerationProvider, ModelInfo, OnFragment
from searchstream.llm.factory import create_chat_model, to_langchain_messages

logger = structlog.get_logger(__name__)

GATEWAY_MODELS = (
    ModelInfo(
        id="anthropic/claude-sonnet-4.5",
        name="Claude Sonnet 4.5",
        provider="Anthropic",
        speed="Fast",
        description="Balanced performance and speed",
    ),
    ModelInfo(
        id="openai/gpt-5.1-codex-max",
        name="GPT-5.1 Codex Max",
        provider="OpenAI",
        speed="Very Fast",
        description="Advanced code generation",
    ),
    ModelInfo(
        id="anthropic/claude-opus-4.5",
        name="Claude Opus 4.5",
        provider="Anthropic",
        speed="Ultra Fast",
        description="Maximum capability and reasoning",
    ),
)


def _fragment_text(content: Any) -> str:
    """Text of a streamed chunk; content may be a string or a list of blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text") or ""))
        return "".join(parts)
    return ""


class GatewayGenerationProvider(GenerationProvider):
    """Streams completions from the gateway through langchain's ChatOpenAI."""

    def __init__(self, settings: Settings):
        self.settings = settings
        logger.info(
            "GatewayGenerationProvider initialized",
            base_url=settings.gateway_base_url,
            llm_mode=settings.llm_mode,
        )

    def _chat_model(self, model: str, options: GenerationOptions):
        try:
            return create_chat_model(
                model,
                self.settings,
                max_tokens=options.max_tokens,
                temperature=options.temperature,
            )
        except ValueError as e:
            raise GenerationError(str(e)) from e

    async def stream_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        options: GenerationOptions,
        on_fragment: OnFragment,
    ) -> None:
        llm = self._chat_model(model, options)
        fragments = 0
        try:
            async for chunk in llm.astream(to_langchain_messages(messages)):
                text = _fragment_text(chunk.content)
                if not text:
                    continue
                fragments += 1
                await on_fragment(text)
        except Exception as e:
            logger.error("Gateway streaming failed", model=model, fragments=fragments, error=str(e))
            raise GenerationError(f"LLM Streaming Error: {e}") from e

        logger.info("Gateway stream finished", model=model, fragments=fragments)

    async def chat_completion(
        self, model: str, messages: Sequence[ChatMessage], options: GenerationOptions
    ) -> str:
        llm = self._chat_model(model, options)
        try:
            response = await llm.ainvoke(to_langchain_messages(messages))
        except Exception as e:
            logger.error("Gateway completion failed", model=model, error=str(e))
            raise GenerationError(f"LLM API Error: {e}") from e
        return _fragment_text(response.content)

    def available_models(self) -> list[ModelInfo]:
        return list(GATEWAY_MODELS)

    async def validate_connection(self) -> bool:
        if self.settings.llm_mode == "mock":
            return True

        url = f"{self.settings.gateway_base_url.rstrip('/')}/v1/models"
        headers = {"Authorization": f"Bearer {self.settings.gateway_api_key or ''}"}
        try:
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=30)) as session:
                async with session.get(url, headers=headers) as response:
                    return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Gateway connection check failed", url=url, error=str(e))
            return False
