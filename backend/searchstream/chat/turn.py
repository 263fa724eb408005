"""Chat turn coordination: streamed generation with a parallel web search."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Sequence

import structlog

from searchstream.api.models.chat import ChatTurnRequest
from searchstream.llm.base import GenerationOptions, GenerationProvider
from searchstream.search.aggregator import DeepSearchService
from searchstream.search.models import DeepSearchOptions, SearchDepth, SearchResult
from searchstream.search.triggers import should_use_deep_search
from searchstream.streaming.base import ChatStream

logger = structlog.get_logger(__name__)


def format_citations(results: Sequence[SearchResult], limit: int = 10) -> str:
    """Render the sources block appended after a streamed answer."""
    if not results:
        return ""

    lines = ["\n\n**Sources:**\n"]
    for index, result in enumerate(results[:limit], start=1):
        line = f"[{index}] [{result.title}]({result.url})"
        if result.source:
            line += f" - {result.source}"
        lines.append(line + "\n")

    if len(results) > limit:
        lines.append(f"\n_...and {len(results) - limit} more sources_\n")

    return "".join(lines)


@dataclass
class TurnOutcome:
    """What a finished turn delivered."""

    completed: bool
    fragments: int = 0
    citations: list[SearchResult] = field(default_factory=list)
    error: str | None = None


class ChatTurnCoordinator:
    """Runs one chat turn.

    Generation starts immediately. When web search is enabled and the latest
    message looks search-worthy, a deep search runs alongside it; its top
    results are appended as a citation fragment once the generated text has
    been fully delivered.
    """

    def __init__(
        self,
        deep_search: DeepSearchService,
        generator: GenerationProvider,
        default_model: str,
        default_options: GenerationOptions | None = None,
        deep_search_max_results: int = 50,
        citation_limit: int = 10,
    ):
        self.deep_search = deep_search
        self.generator = generator
        self.default_model = default_model
        self.default_options = default_options or GenerationOptions()
        self.deep_search_max_results = deep_search_max_results
        self.citation_limit = citation_limit

    def _options_for(self, request: ChatTurnRequest) -> GenerationOptions:
        return GenerationOptions(
            temperature=request.temperature or self.default_options.temperature,
            max_tokens=request.max_tokens or self.default_options.max_tokens,
        )

    async def run_turn(self, request: ChatTurnRequest, stream: ChatStream) -> TurnOutcome:
        """
        Stream one assistant answer and, if triggered, its citations.

        Args:
            request: Validated turn request
            stream: Event sink for this client

        Returns:
            TurnOutcome describing what was delivered
        """
        query = request.latest_message
        model = request.model or self.default_model

        search_task: asyncio.Task[list[SearchResult]] | None = None
        if request.enable_web_search and should_use_deep_search(query):
            search_task = asyncio.create_task(self._run_search(query, stream))

        fragments = 0

        async def forward(content: str) -> None:
            nonlocal fragments
            fragments += 1
            await stream.emit_chunk(content)

        try:
            await stream.emit_chat_start(model)
            try:
                await self.generator.stream_completion(model, request.messages, self._options_for(request), forward)
            except Exception as e:
                logger.error("Chat generation failed", model=model, fragments=fragments, error=str(e))
                await stream.emit_chat_error(str(e) or "Streaming failed")
                # The turn ends here; no citations follow a failed answer.
                if search_task is not None and not search_task.done():
                    search_task.cancel()
                return TurnOutcome(completed=False, fragments=fragments, error=str(e) or "Streaming failed")

            citations: list[SearchResult] = []
            if search_task is not None:
                citations = await search_task
                block = format_citations(citations, self.citation_limit)
                if block:
                    await stream.emit_chunk(block)

            await stream.emit_complete()
        except asyncio.CancelledError:
            if search_task is not None and not search_task.done():
                search_task.cancel()
            logger.info("Chat turn cancelled", model=model, fragments=fragments)
            raise

        logger.info("Chat turn complete", model=model, fragments=fragments, citations=len(citations))
        return TurnOutcome(completed=True, fragments=fragments, citations=citations)

    async def _run_search(self, query: str, stream: ChatStream) -> list[SearchResult]:
        options = DeepSearchOptions(max_results=self.deep_search_max_results, search_depth=SearchDepth.DEEP)
        try:
            await stream.emit_search_start(query, mode=SearchDepth.DEEP.value)
            response = await self.deep_search.deep_search(query, options)
        except Exception as e:
            logger.error("Search branch failed", query=query, error=str(e))
            await stream.emit_search_error(str(e) or "Deep search failed")
            return []

        await stream.emit_search_results(response)
        return list(response.results)
