"""LLM factory for gateway chat models."""

from __future__ import annotations

from typing import Sequence

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from searchstream.api.models.chat import ChatMessage, MessageRole
from searchstream.config.settings import Settings
from searchstream.llm.mock import MockChatModel

logger = structlog.get_logger(__name__)


def create_chat_model(
    model: str,
    settings: Settings,
    max_tokens: int,
    temperature: float = 0.7,
) -> BaseChatModel:
    """Create a chat model routed through the OpenAI-compatible gateway."""
    if settings.llm_mode == "mock" or model.startswith("mock"):
        logger.info("using_mock_llm", model=model)
        return MockChatModel()

    if not settings.gateway_api_key:
        raise ValueError("Gateway API key not configured")

    logger.debug("creating_gateway_model", model=model, base_url=settings.gateway_base_url)
    return ChatOpenAI(
        model=model,
        api_key=settings.gateway_api_key,
        base_url=f"{settings.gateway_base_url.rstrip('/')}/v1",
        max_tokens=max_tokens,
        temperature=temperature,
        timeout=settings.gateway_timeout,
        streaming=True,
    )


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    converted: list[BaseMessage] = []
    for message in messages:
        if message.role == MessageRole.SYSTEM:
            converted.append(SystemMessage(content=message.content))
        elif message.role == MessageRole.ASSISTANT:
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted
