"""Keyword heuristics deciding whether a chat message needs a web search."""

QUICK_SEARCH_KEYWORDS = (
    "latest",
    "recent",
    "current",
    "news",
    "today",
    "what is",
    "who is",
    "when did",
    "where is",
    "search for",
    "find",
    "look up",
    "price of",
    "weather",
    "stock",
    "2024",
    "2025",
    "2026",
    "now",
)

DEEP_SEARCH_KEYWORDS = (
    "hidden",
    "obscure",
    "rare",
    "find",
    "search for",
    "deep",
    "advanced",
    "technical",
    "specific",
    "how to find",
    "where can i",
    "looking for",
)


def _contains_any(query: str, keywords: tuple[str, ...]) -> bool:
    lowered = query.lower()
    return any(keyword in lowered for keyword in keywords)


def should_search(query: str) -> bool:
    """Whether a lightweight single-source search is worth running."""
    return _contains_any(query, QUICK_SEARCH_KEYWORDS)


def should_use_deep_search(query: str) -> bool:
    """Whether the query asks for something specific enough to aggregate every source."""
    return _contains_any(query, DEEP_SEARCH_KEYWORDS)
