"""Tests for multi-source deep search aggregation."""

import pytest

from searchstream.search.aggregator import DeepSearchService, SearchSource, generate_alternative_queries
from searchstream.search.cache import SearchCache
from searchstream.search.models import DeepSearchOptions, SearchDepth
from searchstream.search.ranker import HeuristicRanker
from tests.mocks import FailingSearchProvider, ScriptedSearchProvider, make_result

NO_RECURSION = DeepSearchOptions(recursive=False)


def build_service(primary, *others, cache=None, ranker=None):
    sources = [SearchSource(primary)]
    sources.extend(others)
    return DeepSearchService(sources=sources, cache=cache or SearchCache(), ranker=ranker)


class ExplodingRanker(HeuristicRanker):
    def rank(self, query, results, top_k=None):
        raise RuntimeError("ranker exploded")


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_generate_alternative_queries():
    assert generate_alternative_queries("tokio runtime") == [
        '"tokio runtime"',
        "tokio runtime site:stackoverflow.com",
        "tokio runtime site:github.com",
        "tokio runtime site:reddit.com",
        "tokio runtime tutorial",
        "tokio runtime guide",
        "tokio runtime documentation",
        "tokio runtime example",
    ]


def test_service_requires_a_source():
    with pytest.raises(ValueError):
        DeepSearchService(sources=[])


@pytest.mark.asyncio
async def test_failed_source_only_reduces_results():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(i, "DuckDuckGo") for i in range(6)])
    broken = FailingSearchProvider("Bing")
    qa = ScriptedSearchProvider("StackOverflow", [make_result(i, "StackOverflow", prefix="qa") for i in range(3)])
    service = build_service(primary, SearchSource(broken, divisor=2), SearchSource(qa, fixed_limit=10))

    response = await service.deep_search("query", NO_RECURSION)

    assert response.total_results == 9
    assert broken.calls == 1
    assert {r.source for r in response.results} == {"DuckDuckGo", "StackOverflow"}


@pytest.mark.asyncio
async def test_all_sources_failing_gives_empty_response():
    service = build_service(FailingSearchProvider("DuckDuckGo"), SearchSource(FailingSearchProvider("Bing")))

    response = await service.deep_search("query", NO_RECURSION)

    assert response.total_results == 0
    assert response.results == ()


@pytest.mark.asyncio
async def test_results_are_deduplicated_and_ranked():
    shared = make_result(1, title="shared page")
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(0), shared])
    qa = ScriptedSearchProvider(
        "StackOverflow",
        [shared.model_copy(update={"source": "StackOverflow"}), make_result(2, "StackOverflow", relevance=300)],
    )
    service = build_service(primary, SearchSource(qa, fixed_limit=10))

    response = await service.deep_search("shared", NO_RECURSION)

    urls = [r.url for r in response.results]
    assert len(urls) == len(set(urls)) == 3
    # First occurrence of the shared URL wins, so it keeps the primary's untagged copy.
    assert response.results[0].url == shared.url
    assert response.results[0].source is None
    relevances = [r.relevance for r in response.results]
    assert relevances == sorted(relevances, reverse=True)


@pytest.mark.asyncio
async def test_source_limits_follow_registration():
    primary = ScriptedSearchProvider("DuckDuckGo")
    secondary = ScriptedSearchProvider("Bing")
    qa = ScriptedSearchProvider("StackOverflow")
    hidden = ScriptedSearchProvider("GitHub")
    service = build_service(
        primary,
        SearchSource(secondary, divisor=2),
        SearchSource(qa, fixed_limit=10),
        SearchSource(hidden, fixed_limit=7, hidden=True),
    )

    await service.deep_search("query", DeepSearchOptions(max_results=30, recursive=False))

    assert primary.calls == [("query", 30)]
    assert secondary.calls == [("query", 15)]
    assert qa.calls == [("query", 10)]
    assert hidden.calls == [("query", 7)]


@pytest.mark.asyncio
async def test_hidden_sources_skipped_unless_included():
    primary = ScriptedSearchProvider("DuckDuckGo")
    hidden = ScriptedSearchProvider("Reddit")
    service = build_service(primary, SearchSource(hidden, fixed_limit=10, hidden=True))

    await service.deep_search("query", DeepSearchOptions(include_hidden=False, recursive=False))

    assert primary.calls
    assert hidden.calls == []


@pytest.mark.asyncio
async def test_single_source_mode_uses_primary_only():
    primary = ScriptedSearchProvider("DuckDuckGo")
    secondary = ScriptedSearchProvider("Bing")
    service = build_service(primary, SearchSource(secondary, divisor=2))

    await service.deep_search("query", DeepSearchOptions(max_results=12, enable_multi_source=False, recursive=False))

    assert primary.calls == [("query", 12)]
    assert secondary.calls == []


@pytest.mark.asyncio
async def test_response_is_truncated_to_max_results():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(i) for i in range(40)])
    service = build_service(primary)

    response = await service.deep_search("query", DeepSearchOptions(max_results=25, recursive=False))

    assert response.total_results == 25


@pytest.mark.asyncio
async def test_recursive_fallback_runs_at_most_three_alternatives():
    primary = ScriptedSearchProvider(
        "DuckDuckGo",
        [make_result(i, prefix="alt") for i in range(5)],
        by_query={"rare query": [make_result(0), make_result(1)]},
    )
    service = build_service(primary)

    response = await service.deep_search("rare query", DeepSearchOptions(max_results=50))

    queried = [query for query, _ in primary.calls]
    assert queried == ["rare query", '"rare query"', "rare query site:stackoverflow.com", "rare query site:github.com"]
    assert all(limit == 20 for _, limit in primary.calls[1:])
    # Alternatives return the same five pages each time.
    assert response.total_results == 7


@pytest.mark.asyncio
async def test_recursive_fallback_stops_once_enough_results():
    alternatives = {
        '"q"': [make_result(i, prefix="a") for i in range(5)],
        "q site:stackoverflow.com": [make_result(i, prefix="b") for i in range(5)],
    }
    primary = ScriptedSearchProvider("DuckDuckGo", by_query={"q": [make_result(0)], **alternatives})
    service = build_service(primary)

    response = await service.deep_search("q", DeepSearchOptions(max_results=8))

    assert len(primary.calls) == 3
    assert response.total_results == 8


@pytest.mark.asyncio
async def test_no_fallback_when_enough_results():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(i) for i in range(12)])
    service = build_service(primary)

    response = await service.deep_search("query", DeepSearchOptions(max_results=50))

    assert len(primary.calls) == 1
    assert response.total_results == 12


@pytest.mark.asyncio
async def test_failing_alternative_does_not_abort_fallback():
    primary = FailingSearchProvider("DuckDuckGo")
    service = build_service(primary)

    response = await service.deep_search("query")

    assert primary.calls == 4
    assert response.total_results == 0


@pytest.mark.asyncio
async def test_responses_are_cached_until_expiry():
    clock = FakeClock()
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(i) for i in range(3)])
    service = build_service(primary, cache=SearchCache(ttl_seconds=3600, clock=clock))

    first = await service.deep_search("query", NO_RECURSION)
    second = await service.deep_search("query", NO_RECURSION)
    assert second is first
    assert len(primary.calls) == 1

    clock.now += 3600
    third = await service.deep_search("query", NO_RECURSION)
    assert third is not first
    assert len(primary.calls) == 2


@pytest.mark.asyncio
async def test_cache_key_includes_depth_and_size():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(1)])
    service = build_service(primary)

    await service.deep_search("query", DeepSearchOptions(recursive=False))
    await service.deep_search("query", DeepSearchOptions(recursive=False, search_depth=SearchDepth.EXPERT))
    await service.deep_search("query", DeepSearchOptions(recursive=False, max_results=5))

    assert len(primary.calls) == 3


@pytest.mark.asyncio
async def test_unexpected_error_gives_empty_uncached_response():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(1)])
    service = build_service(primary, ranker=ExplodingRanker())

    response = await service.deep_search("query", NO_RECURSION)
    assert response.total_results == 0
    assert response.search_depth == SearchDepth.DEEP

    await service.deep_search("query", NO_RECURSION)
    assert len(primary.calls) == 2


@pytest.mark.asyncio
async def test_clear_cache():
    primary = ScriptedSearchProvider("DuckDuckGo", [make_result(1)])
    service = build_service(primary)

    await service.deep_search("query", NO_RECURSION)
    service.clear_cache()
    await service.deep_search("query", NO_RECURSION)

    assert len(primary.calls) == 2


@pytest.mark.asyncio
async def test_reformulated_query_supplies_all_results():
    found = [make_result(i, prefix="found") for i in range(12)]
    primary = ScriptedSearchProvider("DuckDuckGo", by_query={"q site:stackoverflow.com": found})
    empty = ScriptedSearchProvider("Bing")
    service = build_service(primary, SearchSource(empty, divisor=2))

    response = await service.deep_search("q")

    assert response.total_results == 12
    assert {r.url for r in response.results} == {r.url for r in found}
    assert len(primary.calls) == 4
