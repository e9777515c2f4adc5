"""Shared fixtures: fake clock, canned sources and a mocked HTTP session."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest
import requests

from keli.datasources.base import WeatherSource
from keli.schemas import WeatherRecord
from keli.store import WeatherCache


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 17, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def html_response(text: str = "<html></html>", status: int = 200) -> Mock:
    """A stand-in for ``requests.Response``."""
    resp = Mock(spec=requests.Response)
    resp.text = text
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return resp


def static_source(name: str, record: WeatherRecord | Exception) -> WeatherSource:
    """A source whose extractor ignores the document and returns ``record``."""

    def extract(_doc: object) -> WeatherRecord:
        if isinstance(record, Exception):
            raise record
        return record

    return WeatherSource(name=name, url=f"https://{name}.example/", extract=extract)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> WeatherCache:
    return WeatherCache(ttl=timedelta(minutes=5), clock=clock)


@pytest.fixture()
def session() -> Mock:
    """Session whose every GET succeeds with an empty page."""
    s = Mock(spec=requests.Session)
    s.get.return_value = html_response()
    return s


@pytest.fixture()
def make_source() -> Callable[[str, WeatherRecord | Exception], WeatherSource]:
    return static_source


@pytest.fixture()
def make_response() -> Callable[..., Mock]:
    return html_response
