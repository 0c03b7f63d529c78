"""Application settings via Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "ARTICLE_VOTES_REDIS_URL"),
    )
    redis_timeout_seconds: float = Field(default=5.0, gt=0)

    # Voting
    vote_window_seconds: int = Field(
        default=7 * 24 * 60 * 60,
        gt=0,
        description="Votes are accepted for this long after article creation",
    )

    # Ranking
    derived_ranking_ttl_seconds: int = Field(
        default=60,
        gt=0,
        description="Lifetime of cached group rankings (store-managed expiry)",
    )
    default_ranking: str = "score"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
