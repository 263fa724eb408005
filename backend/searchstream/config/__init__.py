"""Configuration package."""

from searchstream.config.logging_config import configure_logging
from searchstream.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
