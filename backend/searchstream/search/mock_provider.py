"""Mock search provider for offline runs."""

from __future__ import annotations

from urllib.parse import quote_plus

from searchstream.search.base import SearchProvider
from searchstream.search.models import SearchResult


class MockSearchProvider(SearchProvider):
    """Return deterministic mock results tagged with the slot's source name."""

    def __init__(self, name: str = "Mock", results_per_query: int = 5):
        self.name = name
        self.results_per_query = results_per_query

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        safe_query = quote_plus(query.strip() or "query")
        slug = quote_plus(self.name.lower())
        count = min(limit, self.results_per_query)
        return [
            SearchResult(
                title=f"{self.name} result {idx + 1} for {query}",
                url=f"https://example.com/{slug}/{safe_query}/{idx + 1}",
                snippet=f"Mock snippet {idx + 1} about {query}.",
                source=self.name,
            )
            for idx in range(max(count, 0))
        ]
