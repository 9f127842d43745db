"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Claude API (required for analysis)
    ANTHROPIC_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"
    ANALYSIS_MAX_TOKENS: int = 2000
    WEB_SEARCH_MAX_USES: int = 5

    # SEMrush (optional - backlink enrichment)
    SEMRUSH_API_KEY: Optional[str] = None
    TOP_BACKLINKS_LIMIT: int = 20

    # Resend (optional - for email delivery)
    RESEND_API_KEY: Optional[str] = None
    FROM_EMAIL: str = "onboarding@resend.dev"

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Default analysis settings
    DEFAULT_ENGINES: str = "chatgpt,gemini"

    # Limits
    MAX_LEADERS: int = 3
    MAX_COMPETITORS: int = 3

    # Timeouts (seconds). ANALYSIS_TIMEOUT <= 0 disables the per-call limit.
    API_TIMEOUT: int = 60
    ANALYSIS_TIMEOUT: int = 180

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        case_sensitive = False

    @property
    def default_engine_ids(self) -> List[str]:
        return [e.strip() for e in self.DEFAULT_ENGINES.split(",") if e.strip()]

    @property
    def analysis_timeout(self) -> Optional[float]:
        return float(self.ANALYSIS_TIMEOUT) if self.ANALYSIS_TIMEOUT > 0 else None


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
