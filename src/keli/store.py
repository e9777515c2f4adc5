"""In-memory weather cache with a freshness window.

Entries are keyed by normalized city name and replaced wholesale on every
successful refresh.  A single lock guards the whole key space; it is held
only for the dict lookup/store, never across a fetch or a merge.

Nothing is persisted: the cache lives as long as the process (or the
``WeatherService`` that owns it).
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from keli.schemas import WeatherRecord

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default cache clock."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class CacheEntry:
    """A merged record and when it was fetched."""

    record: WeatherRecord
    fetched_at: datetime


class WeatherCache:
    """Thread-safe TTL cache of merged weather records."""

    def __init__(self, ttl: timedelta, clock: Clock = utc_now) -> None:
        if ttl <= timedelta(0):
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` (fresh or stale), or None."""
        with self._lock:
            return self._entries.get(key)

    def get_fresh(self, key: str) -> WeatherRecord | None:
        """Return the cached record if it is still within the freshness window."""
        entry = self.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry.record

    def put(self, key: str, record: WeatherRecord, fetched_at: datetime | None = None) -> CacheEntry:
        """Store ``record`` under ``key``, replacing any previous entry."""
        entry = CacheEntry(record=record, fetched_at=fetched_at or self.clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        """Check whether ``entry`` is younger than the TTL."""
        return self.clock() - entry.fetched_at < self.ttl

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
