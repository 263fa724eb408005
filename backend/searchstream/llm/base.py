"""Generation provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from pydantic import BaseModel

from searchstream.api.models.chat import ChatMessage

OnFragment = Callable[[str], Awaitable[None]]


class GenerationError(Exception):
    """The generation provider could not produce a completion."""


@dataclass(frozen=True)
class GenerationOptions:
    temperature: float = 0.7
    max_tokens: int = 50000


class ModelInfo(BaseModel):
    """A model offered by the gateway."""

    id: str
    name: str
    provider: str
    speed: str = ""
    description: str = ""


class GenerationProvider(ABC):
    """Produces assistant text for a conversation."""

    @abstractmethod
    async def stream_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        options: GenerationOptions,
        on_fragment: OnFragment,
    ) -> None:
        """
        Stream a completion.

        ``on_fragment`` is awaited once per text fragment, in production
        order, before the next fragment is read.

        Raises:
            GenerationError: If the provider fails at any point
        """
        pass

    @abstractmethod
    async def chat_completion(
        self, model: str, messages: Sequence[ChatMessage], options: GenerationOptions
    ) -> str:
        """Return a full completion in one piece."""
        pass

    @abstractmethod
    def available_models(self) -> list[ModelInfo]:
        pass

    @abstractmethod
    async def validate_connection(self) -> bool:
        pass
