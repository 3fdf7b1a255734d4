"""Application settings with Pydantic validation.

Supports .env file and environment variable overrides.  All env vars
prefixed with FOOTPRINT_ (e.g., FOOTPRINT_CACHE_FILE).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import GroupBy


class Settings(BaseSettings):
    """Global cache settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FOOTPRINT_",
        extra="ignore",
    )

    # --- Cache file ---
    cache_file: Path = Field(
        default=Path("estimates.cache.json"),
        description="Path to the JSON file holding cached estimates",
    )
    cache_encoding: str = Field(
        default="utf-8",
        description="Text encoding used when reading and writing the cache file",
    )
    cache_indent: Optional[int] = Field(
        default=None,
        ge=0,
        description="JSON indent for the cache file (None = compact)",
    )

    # --- Estimation defaults ---
    default_group_by: GroupBy = Field(
        default=GroupBy.DAY,
        description="Grouping used when a request does not specify one",
    )

    # --- Application ---
    log_level: str = Field(default="INFO", description="Logging level")


# Singleton instance
settings = Settings()
