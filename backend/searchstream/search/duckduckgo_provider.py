"""DuckDuckGo HTML search provider (primary engine)."""

import re

import structlog

from searchstream.search.base import HttpSearchProvider
from searchstream.search.models import SOURCE_DUCKDUCKGO, SearchResult
from searchstream.search.normalizer import clean_text, clean_url

logger = structlog.get_logger(__name__)

_RESULT_PATTERN = re.compile(
    r'<a[^>]*class="result__a"[^>]*href="([^"]*)"[^>]*>(.*?)</a>'
    r'.*?<a[^>]*class="result__snippet"[^>]*>(.*?)</a>',
    re.S,
)

NO_DESCRIPTION = "No description available"


def parse_duckduckgo_results(html: str, limit: int, source: str | None = SOURCE_DUCKDUCKGO) -> list[SearchResult]:
    """
    Extract results from a DuckDuckGo HTML results page.

    Matches pairs of result anchors and snippets. A page without matches
    yields an empty list.

    Args:
        html: Raw results page
        limit: Maximum results to extract
        source: Source label to attach, None for untagged results

    Returns:
        Normalized results in page order
    """
    results: list[SearchResult] = []
    for match in _RESULT_PATTERN.finditer(html):
        if len(results) >= limit:
            break
        url = clean_url(match.group(1))
        title = clean_text(match.group(2))
        snippet = clean_text(match.group(3))
        if not url or not title:
            continue
        results.append(
            SearchResult(
                title=title,
                url=url,
                snippet=snippet or NO_DESCRIPTION,
                source=source,
            )
        )
    return results


class DuckDuckGoSearchProvider(HttpSearchProvider):
    """Scrapes the JavaScript-free DuckDuckGo results page."""

    name = SOURCE_DUCKDUCKGO
    endpoint = "https://html.duckduckgo.com/html/"
    headers = {"User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"}

    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        html = await self._get_text(self.endpoint, params={"q": query})
        results = parse_duckduckgo_results(html, limit)
        if not results:
            logger.debug("DuckDuckGo page had no parsable results", query=query, content_length=len(html))
        return results
