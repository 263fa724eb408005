"""Tests for heuristic ranking and deduplication."""

from searchstream.search.models import SearchResult
from searchstream.search.ranker import HeuristicRanker, RankingWeights, deduplicate_results
from tests.mocks import make_result


def test_score_components():
    ranker = HeuristicRanker()
    result = SearchResult(
        title="Understanding asyncio gather",
        url="https://stackoverflow.com/q/1",
        snippet="How asyncio gather collects results",
        source="StackOverflow",
        relevance=250,
    )

    # title 10 + snippet 5 + source 3 + min(250 / 100, 5)
    assert ranker.score("Asyncio Gather", result) == 20.5


def test_relevance_contribution_is_capped():
    ranker = HeuristicRanker()
    result = make_result(1, source="GitHub", relevance=120000)

    assert ranker.score("unrelated", result) == 2 + 5


def test_zero_relevance_contributes_nothing():
    ranker = HeuristicRanker()
    assert ranker.score("unrelated", make_result(1, relevance=0)) == 0
    assert ranker.score("unrelated", make_result(2)) == 0


def test_rank_orders_descending_and_replaces_relevance():
    ranker = HeuristicRanker()
    results = [
        make_result(1, title="Nothing here"),
        make_result(2, title="python packaging guide"),
        make_result(3, source="StackOverflow"),
    ]

    ranked = ranker.rank("python packaging", results)

    assert [r.url for r in ranked] == [results[1].url, results[2].url, results[0].url]
    assert [r.relevance for r in ranked] == [10, 3, 0]
    # Inputs are frozen and untouched.
    assert results[1].relevance is None


def test_rank_keeps_input_order_on_ties():
    ranker = HeuristicRanker()
    results = [make_result(i) for i in range(5)]

    assert ranker.rank("query", results) == [r.model_copy(update={"relevance": 0.0}) for r in results]


def test_rank_top_k():
    ranker = HeuristicRanker()
    results = [make_result(i, relevance=i * 100) for i in range(6)]

    ranked = ranker.rank("query", results, top_k=2)

    assert [r.url for r in ranked] == [results[5].url, results[4].url]


def test_custom_weights():
    ranker = HeuristicRanker(RankingWeights(title_match=1, snippet_match=1, source_bonus={}))
    result = make_result(1, title="query", snippet="query", source="StackOverflow")

    assert ranker.score("query", result) == 2


def test_deduplicate_keeps_first_occurrence():
    first = make_result(1, title="First copy")
    duplicate = make_result(1, title="Second copy")
    other = make_result(2)

    assert deduplicate_results([first, other, duplicate]) == [first, other]
