"""Mock chat model for offline runs."""

from __future__ import annotations

import re
from typing import Any, AsyncIterator, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, BaseMessage, HumanMessage
from langchain_core.outputs import ChatGeneration, ChatGenerationChunk, ChatResult

_TOKEN = re.compile(r"\S+\s*")


class MockChatModel(BaseChatModel):
    """Minimal chat model that returns deterministic responses."""

    model_name: str = "mock"

    @property
    def _llm_type(self) -> str:
        return "mock-chat"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        message = AIMessage(content=self._compose_response(messages))
        return ChatResult(generations=[ChatGeneration(message=message)])

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        return self._generate(messages, stop=stop, run_manager=run_manager, **kwargs)

    async def _astream(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> AsyncIterator[ChatGenerationChunk]:
        for token in _TOKEN.findall(self._compose_response(messages)):
            yield ChatGenerationChunk(message=AIMessageChunk(content=token))

    def _compose_response(self, messages: List[BaseMessage]) -> str:
        question = ""
        for message in reversed(messages):
            if isinstance(message, HumanMessage):
                question = str(message.content).strip()
                break
        if not question:
            return "Mock response."
        return f"Mock response to: {question}"
