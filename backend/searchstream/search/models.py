"""Search result models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

SOURCE_DUCKDUCKGO = "DuckDuckGo"
SOURCE_BING = "Bing"
SOURCE_STACKOVERFLOW = "StackOverflow"
SOURCE_GITHUB = "GitHub"
SOURCE_REDDIT = "Reddit"


class SearchDepth(str, Enum):
    """How hard a search tries to find results."""

    SURFACE = "surface"
    DEEP = "deep"
    EXPERT = "expert"


class SearchResult(BaseModel):
    """Single normalized search result."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Result title without markup")
    url: str = Field(..., description="Canonical destination URL")
    snippet: str = Field(..., description="Result description without markup")
    source: str | None = Field(default=None, description="Name of the source that produced the result")
    relevance: float | None = Field(default=None, description="Provider or ranker relevance score")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "url": self.url, "snippet": self.snippet}
        if self.source is not None:
            payload["source"] = self.source
        if self.relevance is not None:
            payload["relevance"] = self.relevance
        return payload


class SearchResponse(BaseModel):
    """Aggregated search response. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., description="Original search query")
    results: tuple[SearchResult, ...] = Field(default=(), description="Deduplicated, ranked results")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    search_depth: SearchDepth = Field(default=SearchDepth.DEEP, description="Depth the search ran at")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_results(self) -> int:
        return len(self.results)

    @classmethod
    def empty(cls, query: str, search_depth: SearchDepth) -> "SearchResponse":
        return cls(query=query, results=(), search_depth=search_depth)

    def to_payload(self) -> dict[str, Any]:
        """Wire shape used by the socket and REST boundaries."""
        return {
            "query": self.query,
            "results": [result.to_payload() for result in self.results],
            "totalResults": self.total_results,
            "searchDepth": self.search_depth.value,
            "timestamp": self.timestamp.isoformat(),
        }


class DeepSearchOptions(BaseModel):
    """Request-scoped deep search configuration."""

    max_results: int = Field(default=50, ge=1, description="Maximum results in the response")
    search_depth: SearchDepth = Field(default=SearchDepth.DEEP)
    enable_multi_source: bool = Field(default=True, description="Query every registered source")
    recursive: bool = Field(default=True, description="Retry with reformulated queries when results are scarce")
    include_hidden: bool = Field(default=True, description="Include code and discussion sources")
