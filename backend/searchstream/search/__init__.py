"""Web search aggregation."""

from searchstream.search.aggregator import DeepSearchService, SearchSource, generate_alternative_queries
from searchstream.search.base import HttpSearchProvider, SearchProvider
from searchstream.search.cache import SearchCache
from searchstream.search.models import DeepSearchOptions, SearchDepth, SearchResponse, SearchResult
from searchstream.search.ranker import HeuristicRanker, RankingWeights, deduplicate_results
from searchstream.search.triggers import should_search, should_use_deep_search
from searchstream.search.web_search import WebSearchService

__all__ = [
    "DeepSearchOptions",
    "DeepSearchService",
    "HeuristicRanker",
    "HttpSearchProvider",
    "RankingWeights",
    "SearchCache",
    "SearchDepth",
    "SearchProvider",
    "SearchResponse",
    "SearchResult",
    "SearchSource",
    "WebSearchService",
    "deduplicate_results",
    "generate_alternative_queries",
    "should_search",
    "should_use_deep_search",
]
