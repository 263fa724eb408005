"""StackOverflow search through the Stack Exchange API (technical Q&A)."""

from typing import Any

from searchstream.search.base import HttpSearchProvider
from searchstream.search.models import SOURCE_STACKOVERFLOW, SearchResult
from searchstream.search.normalizer import clean_text

PLACEHOLDER = "StackOverflow question"


def parse_stackoverflow_items(data: Any, limit: int) -> list[SearchResult]:
    """Map Stack Exchange ``items`` to results; missing fields become placeholders."""
    items = data.get("items") if isinstance(data, dict) else None
    results: list[SearchResult] = []
    for item in (items or [])[:limit]:
        if not isinstance(item, dict) or not item.get("link"):
            continue
        body = item.get("body_markdown") or ""
        results.append(
            SearchResult(
                title=clean_text(item.get("title")) or PLACEHOLDER,
                url=item["link"],
                snippet=clean_text(body[:200]) or PLACEHOLDER,
                source=SOURCE_STACKOVERFLOW,
                relevance=float(item.get("score") or 0),
            )
        )
    return results


class StackOverflowSearchProvider(HttpSearchProvider):
    """Queries /search/advanced on api.stackexchange.com."""

    name = SOURCE_STACKOVERFLOW
    endpoint = "https://api.stackexchange.com/2.3/search/advanced"

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        params = {
            "order": "desc",
            "sort": "relevance",
            "q": query,
            "site": "stackoverflow",
            "pagesize": limit,
        }
        data = await self._get_json(self.endpoint, params=params)
        return parse_stackoverflow_items(data, limit)
