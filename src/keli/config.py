"""
Application settings.

Values come from the environment (``KELI_`` prefix) or a local ``.env`` file::

    KELI_CACHE_TTL_SECONDS=600 keli weather Turku
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the aggregator and its HTTP front end."""

    model_config = SettingsConfigDict(env_prefix="KELI_", env_file=".env", extra="ignore")

    app_name: str = "keli"
    app_env: str = "development"
    debug: bool = False

    cache_ttl_seconds: float = Field(default=300, gt=0, description="Freshness window")
    request_timeout: float = Field(default=10, gt=0, description="Per-source timeout (s)")

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    default_city: str = "Hyvinkää"
    places_file: Path = Path("data/places.txt")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
