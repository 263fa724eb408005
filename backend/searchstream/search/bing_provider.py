"""Bing HTML search provider (secondary engine)."""

import re

from searchstream.search.base import HttpSearchProvider
from searchstream.search.models import SOURCE_BING, SearchResult
from searchstream.search.normalizer import clean_text, clean_url

_RESULT_PATTERN = re.compile(
    r'<h2[^>]*><a[^>]*href="([^"]*)"[^>]*>(.*?)</a></h2>.*?<p(?:\s[^>]*)?>(.*?)</p>',
    re.S,
)


def parse_bing_results(html: str, limit: int) -> list[SearchResult]:
    """Extract heading-link / paragraph pairs from a Bing results page."""
    results: list[SearchResult] = []
    for match in _RESULT_PATTERN.finditer(html):
        if len(results) >= limit:
            break
        url = clean_url(match.group(1))
        title = clean_text(match.group(2))
        if not url:
            continue
        results.append(
            SearchResult(
                title=title,
                url=url,
                snippet=clean_text(match.group(3)),
                source=SOURCE_BING,
            )
        )
    return results


class BingSearchProvider(HttpSearchProvider):
    """Scrapes the Bing web results page."""

    name = SOURCE_BING
    endpoint = "https://www.bing.com/search"
    headers = {"User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"}

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        html = await self._get_text(self.endpoint, params={"q": query})
        return parse_bing_results(html, limit)
