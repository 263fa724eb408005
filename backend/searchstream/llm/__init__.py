"""LLM gateway access."""

from searchstream.llm.base import GenerationError, GenerationOptions, GenerationProvider, ModelInfo
from searchstream.llm.gateway import GatewayGenerationProvider

__all__ = [
    "GatewayGenerationProvider",
    "GenerationError",
    "GenerationOptions",
    "GenerationProvider",
    "ModelInfo",
]
