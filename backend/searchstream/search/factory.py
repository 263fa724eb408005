"""Search service factory."""

import structlog

from searchstream.config.settings import Settings
from searchstream.search.aggregator import DeepSearchService, SearchSource
from searchstream.search.base import SearchProvider
from searchstream.search.bing_provider import BingSearchProvider
from searchstream.search.cache import SearchCache
from searchstream.search.duckduckgo_provider import DuckDuckGoSearchProvider
from searchstream.search.github_provider import GitHubSearchProvider
from searchstream.search.mock_provider import MockSearchProvider
from searchstream.search.models import (
    SOURCE_BING,
    SOURCE_DUCKDUCKGO,
    SOURCE_GITHUB,
    SOURCE_REDDIT,
    SOURCE_STACKOVERFLOW,
)
from searchstream.search.ranker import HeuristicRanker, RankingWeights
from searchstream.search.reddit_provider import RedditSearchProvider
from searchstream.search.stackoverflow_provider import StackOverflowSearchProvider
from searchstream.search.web_search import WebSearchService

logger = structlog.get_logger(__name__)


def _create_providers(settings: Settings) -> dict[str, SearchProvider]:
    if settings.search_mode == "mock":
        logger.info("Creating mock search providers")
        return {
            name: MockSearchProvider(name=name)
            for name in (SOURCE_DUCKDUCKGO, SOURCE_BING, SOURCE_STACKOVERFLOW, SOURCE_GITHUB, SOURCE_REDDIT)
        }

    timeout = settings.search_http_timeout
    user_agent = settings.search_user_agent
    return {
        SOURCE_DUCKDUCKGO: DuckDuckGoSearchProvider(timeout=timeout, user_agent=user_agent),
        SOURCE_BING: BingSearchProvider(timeout=timeout, user_agent=user_agent),
        SOURCE_STACKOVERFLOW: StackOverflowSearchProvider(timeout=timeout),
        SOURCE_GITHUB: GitHubSearchProvider(timeout=timeout),
        SOURCE_REDDIT: RedditSearchProvider(timeout=timeout),
    }


def create_search_sources(settings: Settings, providers: dict[str, SearchProvider]) -> list[SearchSource]:
    """Register sources in merge order: primary, secondary, Q&A, then hidden ones."""
    return [
        SearchSource(providers[SOURCE_DUCKDUCKGO]),
        SearchSource(providers[SOURCE_BING], divisor=2),
        SearchSource(providers[SOURCE_STACKOVERFLOW], fixed_limit=settings.technical_source_results),
        SearchSource(providers[SOURCE_GITHUB], fixed_limit=settings.hidden_source_results, hidden=True),
        SearchSource(providers[SOURCE_REDDIT], fixed_limit=settings.hidden_source_results, hidden=True),
    ]


def create_search_services(settings: Settings) -> tuple[DeepSearchService, WebSearchService]:
    """
    Create the deep and lightweight search services.

    Args:
        settings: Application settings

    Returns:
        Tuple of (DeepSearchService, WebSearchService), each with its own cache
    """
    providers = _create_providers(settings)

    deep_search = DeepSearchService(
        sources=create_search_sources(settings, providers),
        cache=SearchCache(ttl_seconds=settings.search_cache_ttl_seconds),
        ranker=HeuristicRanker(RankingWeights.from_settings(settings)),
        recursive_threshold=settings.recursive_threshold,
        alternative_query_limit=settings.alternative_query_limit,
        alternative_query_results=settings.alternative_query_results,
    )
    web_search = WebSearchService(
        provider=providers[SOURCE_DUCKDUCKGO],
        cache=SearchCache(ttl_seconds=settings.search_cache_ttl_seconds),
    )

    logger.info("Search services created", search_mode=settings.search_mode)
    return deep_search, web_search
