"""Tests for the lightweight single-source search."""

import pytest

from searchstream.search.cache import SearchCache
from searchstream.search.models import SearchDepth
from searchstream.search.web_search import WebSearchService
from tests.mocks import ScriptedSearchProvider, make_result


@pytest.mark.asyncio
async def test_search_keeps_provider_order_and_dedupes():
    provider = ScriptedSearchProvider(
        "DuckDuckGo",
        [make_result(3), make_result(1, title="query match"), make_result(3), make_result(2)],
    )
    service = WebSearchService(provider, SearchCache())

    response = await service.search("query", max_results=5)

    assert [r.url for r in response.results] == [make_result(i).url for i in (3, 1, 2)]
    assert response.search_depth == SearchDepth.SURFACE
    assert all(r.relevance is None for r in response.results)


@pytest.mark.asyncio
async def test_search_is_cached_per_size():
    provider = ScriptedSearchProvider("DuckDuckGo", [make_result(i) for i in range(10)])
    service = WebSearchService(provider)

    first = await service.search("query", max_results=5)
    again = await service.search("query", max_results=5)
    larger = await service.search("query", max_results=8)

    assert again is first
    assert first.total_results == 5
    assert larger.total_results == 8
    assert provider.calls == [("query", 5), ("query", 8)]

    service.clear_cache()
    await service.search("query", max_results=5)
    assert len(provider.calls) == 3
