"""Multi-source deep search aggregation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence

import structlog

from searchstream.search.base import SearchProvider
from searchstream.search.cache import SearchCache
from searchstream.search.models import DeepSearchOptions, SearchResponse, SearchResult
from searchstream.search.ranker import HeuristicRanker, deduplicate_results

logger = structlog.get_logger(__name__)

ALTERNATIVE_SITES = ("stackoverflow.com", "github.com", "reddit.com")
ALTERNATIVE_SUFFIXES = ("tutorial", "guide", "documentation", "example")


@dataclass(frozen=True)
class SearchSource:
    """A registered provider and how many results to ask it for.

    With ``fixed_limit`` set the source always gets that many; otherwise it
    gets ``max_results // divisor``. Hidden sources only run when the
    request includes hidden sources.
    """

    provider: SearchProvider
    fixed_limit: int | None = None
    divisor: int = 1
    hidden: bool = False

    def limit_for(self, max_results: int) -> int:
        if self.fixed_limit is not None:
            return self.fixed_limit
        return max_results // self.divisor

    @property
    def name(self) -> str:
        return self.provider.name


def generate_alternative_queries(query: str) -> list[str]:
    """Reformulations tried when a search comes back thin."""
    alternatives = [f'"{query}"']
    alternatives.extend(f"{query} site:{site}" for site in ALTERNATIVE_SITES)
    alternatives.extend(f"{query} {suffix}" for suffix in ALTERNATIVE_SUFFIXES)
    return alternatives


class DeepSearchService:
    """Fan a query out to every registered source and merge the answers."""

    def __init__(
        self,
        sources: Sequence[SearchSource],
        cache: SearchCache | None = None,
        ranker: HeuristicRanker | None = None,
        recursive_threshold: int = 10,
        alternative_query_limit: int = 3,
        alternative_query_results: int = 20,
    ):
        """
        Initialize deep search.

        Args:
            sources: Registered sources in merge order; the first is the
                primary engine used alone and for reformulated queries
            cache: Response cache shared by all calls on this service
            ranker: Result ranker
            recursive_threshold: Result count below which reformulations run
            alternative_query_limit: Max reformulated queries per search
            alternative_query_results: Results requested per reformulation
        """
        if not sources:
            raise ValueError("DeepSearchService needs at least one search source")
        self.sources = list(sources)
        self.cache = cache or SearchCache()
        self.ranker = ranker or HeuristicRanker()
        self.recursive_threshold = recursive_threshold
        self.alternative_query_limit = alternative_query_limit
        self.alternative_query_results = alternative_query_results
        logger.info("DeepSearchService initialized", sources=[source.name for source in self.sources])

    @property
    def primary(self) -> SearchSource:
        return self.sources[0]

    async def deep_search(self, query: str, options: DeepSearchOptions | None = None) -> SearchResponse:
        """
        Run a cached, multi-source search.

        Individual source failures reduce the result count. Any other error
        produces an empty response instead of an exception.

        Args:
            query: Search query
            options: Request-scoped options

        Returns:
            Frozen SearchResponse, deduplicated and ranked
        """
        options = options or DeepSearchOptions()
        cache_key = self.cache.make_key(query, options.search_depth, options.max_results)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached deep search results", query=query, results_count=cached.total_results)
            return cached

        logger.info(
            "Deep search started",
            query=query,
            search_depth=options.search_depth.value,
            max_results=options.max_results,
        )

        try:
            results = await self._collect(query, options)

            if options.recursive and len(results) < self.recursive_threshold:
                results = await self._expand_with_alternatives(query, results, options.max_results)

            unique = deduplicate_results(results)
            ranked = self.ranker.rank(query, unique, top_k=options.max_results)
            response = SearchResponse(query=query, results=tuple(ranked), search_depth=options.search_depth)
        except Exception as e:
            logger.error("Deep search failed", query=query, error=str(e), exc_info=True)
            return SearchResponse.empty(query, options.search_depth)

        self.cache.set(cache_key, response)
        logger.info("Deep search complete", query=query, results_count=response.total_results)
        return response

    def clear_cache(self) -> None:
        self.cache.clear()

    def _active_sources(self, options: DeepSearchOptions) -> list[SearchSource]:
        if not options.enable_multi_source:
            return [self.primary]
        return [source for source in self.sources if options.include_hidden or not source.hidden]

    async def _collect(self, query: str, options: DeepSearchOptions) -> list[SearchResult]:
        active = self._active_sources(options)
        if not options.enable_multi_source:
            limits = [options.max_results]
        else:
            limits = [source.limit_for(options.max_results) for source in active]

        outcomes = await asyncio.gather(
            *(source.provider.search(query, limit) for source, limit in zip(active, limits)),
            return_exceptions=True,
        )

        collected: list[SearchResult] = []
        for source, outcome in zip(active, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Search source raised", source=source.name, error=str(outcome), query=query)
                continue
            logger.debug("Search source merged", source=source.name, results_count=len(outcome))
            collected.extend(outcome)
        return collected

    async def _expand_with_alternatives(
        self, query: str, results: list[SearchResult], max_results: int
    ) -> list[SearchResult]:
        expanded = list(results)
        alternatives = generate_alternative_queries(query)[: self.alternative_query_limit]
        logger.info("Recursive search with alternative queries", query=query, current_count=len(expanded))

        for alternative in alternatives:
            try:
                more = await self.primary.provider.search(alternative, self.alternative_query_results)
            except Exception as e:
                logger.warning("Alternative query failed", source=self.primary.name, query=alternative, error=str(e))
                more = []
            expanded.extend(more)
            if len(expanded) >= max_results:
                break

        return expanded
