"""Application settings with environment variable support."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3001, description="API port")
    debug: bool = Field(default=False, description="Debug mode (uvicorn reload)")
    log_level: str = Field(default="INFO", description="Log level")
    debug_mode: bool = Field(default=False, description="Enable debug logging for streams")
    cors_allowed_origins: str = Field(default="*", description="Allowed CORS origins (comma-separated or *)")

    # LLM Gateway Settings
    llm_mode: Literal["live", "mock"] = Field(default="live", description="LLM mode: live or mock")
    gateway_base_url: str = Field(default="https://go.trybons.ai", description="LLM gateway base URL")
    gateway_api_key: Optional[str] = Field(default=None, description="LLM gateway API key")
    gateway_timeout: int = Field(default=1600, description="LLM gateway request timeout in seconds")
    default_model: str = Field(default="anthropic/claude-sonnet-4.5", description="Model used when none is requested")
    default_temperature: float = Field(default=0.7, description="Sampling temperature when none is requested")
    default_max_tokens: int = Field(default=50000, description="Max tokens when none is requested")

    # Search Settings
    search_mode: Literal["live", "mock"] = Field(default="live", description="Search mode: live or mock")
    search_http_timeout: int = Field(default=15, description="Per-request timeout for search sources in seconds")
    search_user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent sent to HTML search engines")
    search_cache_ttl_seconds: float = Field(default=3600.0, description="Search cache time-to-live")
    deep_search_max_results: int = Field(default=50, description="Max results for chat-triggered deep search")
    quick_search_max_results: int = Field(default=5, description="Max results for lightweight search")
    recursive_threshold: int = Field(default=10, description="Result count below which reformulated queries run")
    alternative_query_limit: int = Field(default=3, description="Max reformulated queries per deep search")
    alternative_query_results: int = Field(default=20, description="Results requested per reformulated query")
    technical_source_results: int = Field(default=10, description="Results requested from the Q&A source")
    hidden_source_results: int = Field(default=10, description="Results requested from code and discussion sources")
    citation_limit: int = Field(default=10, description="Results listed in the citation block")

    # Ranking weights
    rank_title_weight: float = Field(default=10.0, description="Score when the query appears in the title")
    rank_snippet_weight: float = Field(default=5.0, description="Score when the query appears in the snippet")
    rank_stackoverflow_bonus: float = Field(default=3.0, description="Bonus for StackOverflow results")
    rank_github_bonus: float = Field(default=2.0, description="Bonus for GitHub results")
    rank_relevance_divisor: float = Field(default=100.0, description="Divisor applied to provider relevance")
    rank_relevance_cap: float = Field(default=5.0, description="Cap on the provider relevance contribution")

    @property
    def cors_origins(self) -> str | list[str]:
        """CORS origins in the shape python-socketio and Starlette expect."""
        if self.cors_allowed_origins.strip() == "*":
            return "*"
        return [item.strip() for item in self.cors_allowed_origins.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
