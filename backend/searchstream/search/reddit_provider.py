"""Reddit search (community-discussion engine)."""

from typing import Any

from searchstream.search.base import HttpSearchProvider
from searchstream.search.models import SOURCE_REDDIT, SearchResult
from searchstream.search.normalizer import clean_text

PLACEHOLDER = "Reddit discussion"


def parse_reddit_listing(data: Any, limit: int) -> list[SearchResult]:
    """Map a Reddit listing's ``children`` to results pointing at the thread."""
    listing = data.get("data") if isinstance(data, dict) else None
    children = listing.get("children") if isinstance(listing, dict) else None
    results: list[SearchResult] = []
    for child in (children or [])[:limit]:
        post = child.get("data") if isinstance(child, dict) else None
        if not isinstance(post, dict) or not post.get("permalink"):
            continue
        title = clean_text(post.get("title")) or PLACEHOLDER
        selftext = post.get("selftext") or ""
        results.append(
            SearchResult(
                title=title,
                url=f"https://reddit.com{post['permalink']}",
                snippet=clean_text(selftext[:200]) or title,
                source=SOURCE_REDDIT,
                relevance=float(post.get("score") or 0),
            )
        )
    return results


class RedditSearchProvider(HttpSearchProvider):
    """Uses the public search.json listing."""

    name = SOURCE_REDDIT
    endpoint = "https://www.reddit.com/search.json"
    headers = {"User-Agent": "Mozilla/5.0"}

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        data = await self._get_json(self.endpoint, params={"q": query, "limit": limit})
        return parse_reddit_listing(data, limit)
