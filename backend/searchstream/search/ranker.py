"""Heuristic ranking for aggregated search results."""

from dataclasses import dataclass, field
from typing import Mapping, Sequence

import structlog

from searchstream.search.models import SOURCE_GITHUB, SOURCE_STACKOVERFLOW, SearchResult

logger = structlog.get_logger(__name__)


def _default_source_bonus() -> dict[str, float]:
    return {SOURCE_STACKOVERFLOW: 3.0, SOURCE_GITHUB: 2.0}


@dataclass(frozen=True)
class RankingWeights:
    """Tunable weights of the linear relevance score."""

    title_match: float = 10.0
    snippet_match: float = 5.0
    source_bonus: Mapping[str, float] = field(default_factory=_default_source_bonus)
    relevance_divisor: float = 100.0
    relevance_cap: float = 5.0

    @classmethod
    def from_settings(cls, settings) -> "RankingWeights":
        return cls(
            title_match=settings.rank_title_weight,
            snippet_match=settings.rank_snippet_weight,
            source_bonus={
                SOURCE_STACKOVERFLOW: settings.rank_stackoverflow_bonus,
                SOURCE_GITHUB: settings.rank_github_bonus,
            },
            relevance_divisor=settings.rank_relevance_divisor,
            relevance_cap=settings.rank_relevance_cap,
        )


class HeuristicRanker:
    """Score results against the query and order them best first."""

    def __init__(self, weights: RankingWeights | None = None):
        self.weights = weights or RankingWeights()

    def score(self, query: str, result: SearchResult) -> float:
        """Compute the relevance score of one result."""
        weights = self.weights
        query_lower = query.lower()
        score = 0.0

        if query_lower in result.title.lower():
            score += weights.title_match
        if query_lower in result.snippet.lower():
            score += weights.snippet_match

        if result.source is not None:
            score += weights.source_bonus.get(result.source, 0.0)

        # Zero or missing provider relevance contributes nothing.
        if result.relevance:
            score += min(result.relevance / weights.relevance_divisor, weights.relevance_cap)

        return score

    def rank(
        self, query: str, results: Sequence[SearchResult], top_k: int | None = None
    ) -> list[SearchResult]:
        """
        Rank results by heuristic score.

        The computed score replaces the provider relevance. Ties keep input
        order.

        Args:
            query: Search query
            results: Results to rank, expected to be deduplicated
            top_k: Return only top K results (None = return all)

        Returns:
            New result objects ordered by descending score
        """
        if not results:
            return []

        scored = [result.model_copy(update={"relevance": self.score(query, result)}) for result in results]
        ranked = sorted(scored, key=lambda item: item.relevance, reverse=True)

        if top_k is not None:
            ranked = ranked[:top_k]

        logger.debug("Search results ranked", query=query, original_count=len(results), ranked_count=len(ranked))
        return ranked


def deduplicate_results(results: Sequence[SearchResult]) -> list[SearchResult]:
    """Drop results whose URL was already seen, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[SearchResult] = []
    for result in results:
        if result.url in seen:
            continue
        seen.add(result.url)
        unique.append(result)
    return unique
