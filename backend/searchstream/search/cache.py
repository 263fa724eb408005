"""Time-bounded memoization of search responses."""

from __future__ import annotations

import time
from typing import Callable

import structlog

from searchstream.search.models import SearchDepth, SearchResponse

logger = structlog.get_logger(__name__)


class SearchCache:
    """In-process cache of search responses.

    Entries are checked for expiry when they are read; nothing is evicted in
    the background. Concurrent writers for the same key simply overwrite
    each other.
    """

    def __init__(self, ttl_seconds: float = 3600.0, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            ttl_seconds: Lifetime of an entry
            clock: Monotonic time source in seconds
        """
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, tuple[float, SearchResponse]] = {}

    @staticmethod
    def make_key(query: str, search_depth: SearchDepth, max_results: int) -> str:
        return f"{query}|{search_depth.value}|{max_results}"

    def get(self, key: str) -> SearchResponse | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        created_at, response = entry
        if self.clock() - created_at >= self.ttl_seconds:
            del self._entries[key]
            logger.debug("Search cache entry expired", key=key)
            return None
        return response

    def set(self, key: str, response: SearchResponse) -> None:
        self._entries[key] = (self.clock(), response)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
