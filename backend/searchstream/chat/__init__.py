"""Chat turn handling."""

from searchstream.chat.turn import ChatTurnCoordinator, TurnOutcome, format_citations

__all__ = ["ChatTurnCoordinator", "TurnOutcome", "format_citations"]
