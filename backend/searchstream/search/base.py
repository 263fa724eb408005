"""Base search provider interface."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
import structlog

from searchstream.search.models import SearchResult

logger = structlog.get_logger(__name__)


class SearchProvider(ABC):
    """Abstract base class for search sources.

    A provider turns a query into at most ``limit`` normalized results. It
    never raises for source-side problems: a failed or empty source is
    reported as an empty list.
    """

    name: str = "unknown"

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        """
        Search the source for a query.

        Args:
            query: Search query string
            limit: Maximum number of results to return

        Returns:
            List of normalized results, empty on failure
        """
        pass


class HttpSearchProvider(SearchProvider):
    """Search provider backed by a public HTTP endpoint.

    Subclasses implement ``_search`` and use ``_get_text`` / ``_get_json``;
    every network, status or parse error is logged and absorbed here.
    """

    endpoint: str = ""
    headers: dict[str, str] = {}

    def __init__(self, timeout: int = 15, user_agent: str | None = None):
        """
        Initialize HTTP provider.

        Args:
            timeout: Request timeout in seconds
            user_agent: Overrides the provider's default User-Agent header
        """
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.request_headers = dict(self.headers)
        if user_agent:
            self.request_headers["User-Agent"] = user_agent

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        if limit <= 0 or not query.strip():
            return []

        try:
            results = await self._search(query, limit)
        except aiohttp.ClientResponseError as e:
            logger.warning("Search source returned error status", source=self.name, status=e.status, query=query)
            return []
        except aiohttp.ClientError as e:
            logger.warning("Search source connection error", source=self.name, error=str(e), query=query)
            return []
        except asyncio.TimeoutError:
            logger.warning("Search source timed out", source=self.name, query=query)
            return []
        except Exception as e:
            logger.warning(
                "Search source failed",
                source=self.name,
                error=str(e),
                error_type=type(e).__name__,
                query=query,
            )
            return []

        logger.info("Search source completed", source=self.name, query=query, results_count=len(results[:limit]))
        return results[:limit]

    @abstractmethod
    async def _search(self, query: str, limit: int) -> list[SearchResult]:
        pass

    async def _get_text(self, url: str, params: dict[str, Any] | None = None) -> str:
        async with aiohttp.ClientSession(timeout=self.timeout, headers=self.request_headers) as session:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.text()

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        async with aiohttp.ClientSession(timeout=self.timeout, headers=self.request_headers) as session:
            async with session.get(url, params=params) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
