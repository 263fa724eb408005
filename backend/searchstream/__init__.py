"""Streaming chat front-end with multi-source web search aggregation."""

__version__ = "1.0.0"
