"""
Application settings.

Values come from environment variables prefixed with ``BIRD_FINDER_``
(or a local ``.env`` file), e.g. ``BIRD_FINDER_EBIRD_API_TOKEN=abc123``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI and flows."""

    model_config = SettingsConfigDict(
        env_prefix="BIRD_FINDER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "bird-finder"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Default search origin when the CLI is not given --lat/--lon (Portland, OR)
    lat: float = Field(default=45.5, ge=-90, le=90)
    lon: float = Field(default=-122.6, ge=-180, le=180)

    ebird_api_token: str = ""
    data_dir: Path = Path("data")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
