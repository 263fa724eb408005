"""Lightweight single-source web search."""

from __future__ import annotations

import structlog

from searchstream.search.base import SearchProvider
from searchstream.search.cache import SearchCache
from searchstream.search.models import SearchDepth, SearchResponse
from searchstream.search.ranker import deduplicate_results

logger = structlog.get_logger(__name__)


class WebSearchService:
    """Cached primary-engine search for quick lookups; keeps provider order."""

    def __init__(self, provider: SearchProvider, cache: SearchCache | None = None):
        self.provider = provider
        self.cache = cache or SearchCache()

    async def search(self, query: str, max_results: int = 5) -> SearchResponse:
        cache_key = self.cache.make_key(query, SearchDepth.SURFACE, max_results)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached search results", query=query)
            return cached

        logger.info("Performing web search", query=query, source=self.provider.name)
        try:
            results = await self.provider.search(query, max_results)
        except Exception as e:
            logger.error("Web search failed", query=query, error=str(e))
            return SearchResponse.empty(query, SearchDepth.SURFACE)

        response = SearchResponse(
            query=query,
            results=tuple(deduplicate_results(results)[:max_results]),
            search_depth=SearchDepth.SURFACE,
        )
        self.cache.set(cache_key, response)
        return response

    def clear_cache(self) -> None:
        self.cache.clear()
