"""Tests for the aggregation facade and city name normalization."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest
import requests

from keli.config import Settings
from keli.datasources.base import ExtractionError, WeatherSource
from keli.schemas import WeatherRecord
from keli.service import (
    CITY_REPLACEMENTS,
    CityNotFoundError,
    WeatherService,
    normalize_city,
)
from keli.store import WeatherCache

if TYPE_CHECKING:
    from conftest import FakeClock

MakeSource = Callable[[str, "WeatherRecord | Exception"], WeatherSource]


class TestNormalizeCity:
    """Test city name folding."""

    def test_folds_umlauts(self) -> None:
        assert normalize_city("Hyvinkää") == "Hyvinkaa"
        assert normalize_city("Hyvinkää") == normalize_city("Hyvinkaa")

    def test_preserves_case(self) -> None:
        assert normalize_city("Äänekoski") == "Aanekoski"
        assert normalize_city("JYVÄSKYLÄ") == "JYVASKYLA"

    def test_swedish_ring(self) -> None:
        assert normalize_city("Åbo") == "Abo"

    def test_strips_whitespace(self) -> None:
        assert normalize_city("  Turku ") == "Turku"

    @pytest.mark.parametrize(
        "city", ["Hyvinkää", "Hyvinkaa", "Jyväskylä", "Mänttä-Vilppula", " Öö ", "", "Turku"]
    )
    def test_idempotent(self, city: str) -> None:
        once = normalize_city(city)
        assert normalize_city(once) == once

    def test_custom_replacements(self) -> None:
        replacements = {**CITY_REPLACEMENTS, "ü": "u"}
        assert normalize_city("Zürich", replacements) == "Zurich"


class TestGetWeatherData:
    """Test the cache-fronted lookup."""

    def _service(
        self, sources: list[WeatherSource], cache: WeatherCache, session: Mock
    ) -> WeatherService:
        return WeatherService(sources=sources, cache=cache, session=session)

    def test_merges_three_sources(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        sources = [
            make_source("a", WeatherRecord(city="Turku", temperature_max=10)),
            make_source("b", WeatherRecord(temperature=3.0, observation_hour=14)),
            make_source("c", WeatherRecord(sunrise="08:15", sunset="17:40")),
        ]
        record = self._service(sources, cache, session).get_weather_data("Turku")

        assert record.city == "Turku"
        assert record.temperature_max == 10
        assert record.temperature == 3.0
        assert record.observation_hour == 14
        assert record.sunrise == "08:15"
        assert record.sunset == "17:40"

    def test_sets_last_updated_and_caches(
        self,
        make_source: MakeSource,
        cache: WeatherCache,
        clock: FakeClock,
        session: Mock,
    ) -> None:
        service = self._service(
            [make_source("a", WeatherRecord(city="Hyvinkää"))], cache, session
        )
        record = service.get_weather_data("Hyvinkää")

        assert record.last_updated == clock.now
        entry = cache.get("Hyvinkaa")
        assert entry is not None
        assert entry.record == record
        assert entry.fetched_at == clock.now

    def test_uses_normalized_city_in_urls(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        service = self._service(
            [make_source("a", WeatherRecord(city="Hyvinkää"))], cache, session
        )
        service.get_weather_data("Hyvinkää")
        session.get.assert_called_once_with("https://a.example/Hyvinkaa")

    def test_fresh_hit_skips_fetch(
        self,
        make_source: MakeSource,
        cache: WeatherCache,
        clock: FakeClock,
        session: Mock,
    ) -> None:
        service = self._service([make_source("a", WeatherRecord(city="Turku"))], cache, session)
        first = service.get_weather_data("Turku")
        clock.advance(60)
        second = service.get_weather_data("Turku")

        assert second is first
        assert session.get.call_count == 1

    def test_spelling_variants_share_cache_entry(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        service = self._service(
            [make_source("a", WeatherRecord(city="Hyvinkää"))], cache, session
        )
        service.get_weather_data("Hyvinkää")
        service.get_weather_data("Hyvinkaa")
        assert session.get.call_count == 1

    def test_stale_entry_triggers_refresh(
        self,
        make_source: MakeSource,
        cache: WeatherCache,
        clock: FakeClock,
        session: Mock,
    ) -> None:
        service = self._service([make_source("a", WeatherRecord(city="Turku"))], cache, session)
        first = service.get_weather_data("Turku")
        clock.advance(301)
        second = service.get_weather_data("Turku")

        assert session.get.call_count == 2
        assert second.last_updated > first.last_updated  # type: ignore[operator]

    def test_all_sources_fail_not_found(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        session.get.side_effect = requests.ConnectionError("down")
        sources = [
            make_source("a", WeatherRecord(city="Turku")),
            make_source("b", WeatherRecord(temperature=3.0)),
            make_source("c", WeatherRecord(sunrise="08:15")),
        ]
        service = self._service(sources, cache, session)

        with pytest.raises(CityNotFoundError) as excinfo:
            service.get_weather_data("Turku")
        assert excinfo.value.city == "Turku"
        assert len(cache) == 0

        # No negative caching: the next call goes upstream again
        with pytest.raises(CityNotFoundError):
            service.get_weather_data("Turku")
        assert session.get.call_count == 6

    def test_no_city_is_not_found(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        sources = [
            make_source("a", ExtractionError("missing city")),
            make_source("b", WeatherRecord(temperature=3.0)),
        ]
        service = self._service(sources, cache, session)
        with pytest.raises(CityNotFoundError, match='"Hyvinkää"'):
            service.get_weather_data("Hyvinkää")
        assert "Hyvinkaa" not in cache

    def test_one_failing_source_is_ignored(
        self, make_source: MakeSource, cache: WeatherCache, session: Mock
    ) -> None:
        sources = [
            make_source("a", RuntimeError("markup changed")),
            make_source("b", WeatherRecord(city="Oulu", temperature=-2.0)),
        ]
        record = self._service(sources, cache, session).get_weather_data("Oulu")
        assert record.city == "Oulu"
        assert record.temperature == -2.0


class TestFromSettings:
    """Test building a service from settings."""

    def test_builds_cache_and_session(self) -> None:
        settings = Settings(cache_ttl_seconds=120, request_timeout=3)
        with patch("keli.service.create_session") as mock_create:
            service = WeatherService.from_settings(settings)
        mock_create.assert_called_once_with(timeout=3)
        assert service.cache.ttl == timedelta(seconds=120)
        assert [s.name for s in service.sources] == ["foreca", "ampparit", "moisio"]


class TestConcurrentLookups:
    """Refreshes run outside the cache lock and are not coalesced."""

    def test_slow_refresh_does_not_block_other_cities(
        self, cache: WeatherCache, session: Mock
    ) -> None:
        started = threading.Event()
        release = threading.Event()

        def blocking_extract(_doc: object) -> WeatherRecord:
            started.set()
            release.wait(timeout=10)
            return WeatherRecord(city="Turku")

        source = WeatherSource(name="slow", url="https://slow.example/", extract=blocking_extract)
        service = WeatherService(sources=[source], cache=cache, session=session)
        oulu = WeatherRecord(city="Oulu", temperature=-2.0)
        cache.put("Oulu", oulu)

        refresh = threading.Thread(target=service.get_weather_data, args=("Turku",))
        refresh.start()
        try:
            assert started.wait(timeout=5)

            results: list[WeatherRecord] = []
            reader = threading.Thread(
                target=lambda: results.append(service.get_weather_data("Oulu"))
            )
            reader.start()
            reader.join(timeout=2)

            assert not reader.is_alive()
            assert not release.is_set()
            assert results == [oulu]
            # Writes to other keys go through as well
            cache.put("Lahti", WeatherRecord(city="Lahti"))
            assert "Lahti" in cache
        finally:
            release.set()
            refresh.join(timeout=5)

        assert cache.get_fresh("Turku") is not None

    def test_same_stale_city_refreshed_by_each_caller(
        self,
        make_source: MakeSource,
        cache: WeatherCache,
        clock: FakeClock,
        session: Mock,
    ) -> None:
        both_in_flight = threading.Barrier(2, timeout=5)

        def meeting_extract(_doc: object) -> WeatherRecord:
            # Only passes when both refreshes are upstream at the same time
            both_in_flight.wait()
            return WeatherRecord(city="Turku", temperature=4.0)

        sources = [
            WeatherSource(name="a", url="https://a.example/", extract=meeting_extract),
            make_source("b", WeatherRecord(sunrise="08:15")),
        ]
        service = WeatherService(sources=sources, cache=cache, session=session)
        cache.put("Turku", WeatherRecord(city="Turku", temperature=1.0))
        clock.advance(301)

        results: list[WeatherRecord] = []
        errors: list[BaseException] = []

        def lookup() -> None:
            try:
                results.append(service.get_weather_data("Turku"))
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=lookup) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert errors == []
        assert len(results) == 2
        assert session.get.call_count == 2 * len(sources)
        assert len(cache) == 1
        entry = cache.get("Turku")
        assert entry is not None
        assert any(entry.record is r for r in results)
        assert entry.record.temperature == 4.0
