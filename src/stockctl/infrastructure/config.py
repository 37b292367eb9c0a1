"""Runtime settings, read from ``STOCKCTL_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOCKCTL_", env_file=".env", extra="ignore"
    )

    # Directory holding products.json and transactions.json
    DATA_DIR: Path = Path("data")

    LOG_LEVEL: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
