"""
Aggregation facade: the single public entry point for weather lookups.

    get_weather_data("Hyvinkää")
      -> normalize ("Hyvinkaa")
      -> cache (fresh hit: return)
      -> fetch_all (all sources concurrently)
      -> merge_records
      -> cache.put (only when a city was identified)

Concurrent requests for the same stale city are not coalesced: each runs
its own fetch and the last ``put`` wins.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from datetime import timedelta

import requests

from keli.config import Settings, get_settings
from keli.datasources import DEFAULT_SOURCES, WeatherSource
from keli.fetch import fetch_all
from keli.merge import merge_records
from keli.schemas import WeatherRecord
from keli.services.http import create_session
from keli.store import WeatherCache

logger = logging.getLogger(__name__)

#: Characters folded when building cache keys and source URLs.  Case is kept.
CITY_REPLACEMENTS: dict[str, str] = {
    "ä": "a",
    "ö": "o",
    "å": "a",
    "Ä": "A",
    "Ö": "O",
    "Å": "A",
}


class CityNotFoundError(LookupError):
    """No source produced usable data for the requested city."""

    def __init__(self, city: str) -> None:
        self.city = city
        super().__init__(f'No weather data found for city "{city}"')


def normalize_city(city: str, replacements: Mapping[str, str] = CITY_REPLACEMENTS) -> str:
    """
    Fold diacritics for use as cache key and in source URLs.

    Idempotent as long as no replacement value is itself a key.
    """
    return city.strip().translate(str.maketrans(dict(replacements)))


class WeatherService:
    """Cache-fronted fan-out over the configured weather sources."""

    def __init__(
        self,
        *,
        sources: Sequence[WeatherSource] = DEFAULT_SOURCES,
        cache: WeatherCache,
        session: requests.Session,
        replacements: Mapping[str, str] = CITY_REPLACEMENTS,
        log: logging.Logger = logger,
    ) -> None:
        self.sources = tuple(sources)
        self.cache = cache
        self.session = session
        self.replacements = replacements
        self._log = log

    @classmethod
    def from_settings(cls, settings: Settings) -> WeatherService:
        """Build a service with a fresh cache and session from settings."""
        return cls(
            cache=WeatherCache(ttl=timedelta(seconds=settings.cache_ttl_seconds)),
            session=create_session(timeout=settings.request_timeout),
        )

    def get_weather_data(self, city: str) -> WeatherRecord:
        """
        Return merged weather for ``city``.

        Raises:
            CityNotFoundError: Every source failed or none identified the city.
        """
        key = normalize_city(city, self.replacements)

        cached = self.cache.get_fresh(key)
        if cached is not None:
            self._log.debug("Cache hit for %s", key)
            return cached

        self._log.debug("Cache miss for %s, querying %d sources", key, len(self.sources))
        partials = fetch_all(self.sources, key, session=self.session, log=self._log)
        merged = merge_records(partials)

        if merged.is_empty:
            self._log.info("No weather data found for %r", city)
            raise CityNotFoundError(city)

        now = self.cache.clock()
        record = merged.model_copy(update={"last_updated": now})
        self.cache.put(key, record, fetched_at=now)
        return record


_default_service: WeatherService | None = None
_default_lock = threading.Lock()


def get_default_service() -> WeatherService:
    """Return the process-wide service, building it on first use."""
    global _default_service
    with _default_lock:
        if _default_service is None:
            _default_service = WeatherService.from_settings(get_settings())
        return _default_service


def get_weather_data(city: str) -> WeatherRecord:
    """Look up ``city`` through the process-wide service."""
    return get_default_service().get_weather_data(city)
