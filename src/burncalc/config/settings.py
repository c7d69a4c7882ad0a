"""
Application settings using Pydantic.

Provides environment-based configuration loading with BURNCALC_ prefix.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BURNCALC_",
        extra="ignore",
    )

    # Session defaults
    slo: float = Field(default=99.9, ge=0, le=100)
    window_days: int = Field(default=30, ge=1)
    total_events: int = Field(default=1_000_000, ge=0)
    collection_freq: str = "1m"

    # Preset file (YAML with session/alerts sections)
    config_path: str | None = None

    # Logging
    log_level: str = "WARNING"
    log_json: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
