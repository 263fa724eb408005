"""Mock objects for testing."""

from tests.mocks.mock_llm import FailingGenerator, ScriptedGenerator
from tests.mocks.mock_search import FailingSearchProvider, ScriptedSearchProvider, make_result
from tests.mocks.mock_stream import RecordingChatStream

__all__ = [
    "FailingGenerator",
    "FailingSearchProvider",
    "RecordingChatStream",
    "ScriptedGenerator",
    "ScriptedSearchProvider",
    "make_result",
]
