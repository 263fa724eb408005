"""GitHub repository search (code-repository engine)."""

from typing import Any

from searchstream.search.base import HttpSearchProvider
from searchstream.search.models import SOURCE_GITHUB, SearchResult
from searchstream.search.normalizer import clean_text

PLACEHOLDER = "GitHub repository"


def parse_github_repositories(data: Any, limit: int) -> list[SearchResult]:
    """Map repository search ``items`` to results ranked by stars."""
    items = data.get("items") if isinstance(data, dict) else None
    results: list[SearchResult] = []
    for item in (items or [])[:limit]:
        if not isinstance(item, dict) or not item.get("html_url"):
            continue
        results.append(
            SearchResult(
                title=clean_text(item.get("full_name")) or PLACEHOLDER,
                url=item["html_url"],
                snippet=clean_text(item.get("description")) or PLACEHOLDER,
                source=SOURCE_GITHUB,
                relevance=float(item.get("stargazers_count") or 0),
            )
        )
    return results


class GitHubSearchProvider(HttpSearchProvider):
    """Unauthenticated GitHub REST search, sorted by stars."""

    name = SOURCE_GITHUB
    endpoint = "https://api.github.com/search/repositories"
    headers = {
        "User-Agent": "Mozilla/5.0",
        "Accept": "application/vnd.github.v3+json",
    }

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        params = {"q": query, "sort": "stars", "order": "desc", "per_page": limit}
        data = await self._get_json(self.endpoint, params=params)
        return parse_github_repositories(data, limit)
