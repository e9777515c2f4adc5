"""Ampparit city weather: current conditions, hourly forecast and tomorrow.

Mandatory: the city name, which is also the canonical display name of the
merged record.  Each hourly point is parsed on its own; a point that fails
to parse is skipped, the rest of the forecast is kept.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from keli.datasources.base import (
    WeatherSource,
    optional,
    parse_int,
    parse_millimetres,
    parse_temperature,
    require_text,
    select_text,
)
from keli.schemas import HourlyPoint, WeatherRecord

logger = logging.getLogger(__name__)

URL = "https://www.ampparit.com/saa/"

CITY = ".current-weather__location"
TEMPERATURE = "span.current-weather__temperature"
TEMPERATURE_FEELS_LIKE = "span.weather-lighter.weather-temperature-feelslike"
RAINFALL = ".current-weather__precipitation .weather-value"
OBSERVATION_HOUR = "ol > li:nth-child(1) > div.weather-time > time"
HOURS = ".weather-hour-selector ol > li"
TOMORROW = ".weekly-weather-list-wrapper:nth-child(2)"

MAX_HOURS = 24

WEATHER_SYMBOLS: dict[str, str] = {
    "d000": "\u2600\ufe0f",  # clear, day
    "n000": "\U0001f31c",  # clear, night
}
UNKNOWN_SYMBOL = "\u2753"


def weather_symbol(classes: list[str]) -> str:
    """Map the symbol element's CSS classes to an emoji."""
    for name in classes:
        if name in WEATHER_SYMBOLS:
            return WEATHER_SYMBOLS[name]
    return UNKNOWN_SYMBOL


def _observation_hour(text: str) -> int:
    hour = parse_int(text)
    if not 0 <= hour <= 23:
        raise ValueError(f"hour out of range: {hour}")
    return hour


def _parse_hour(item: Tag) -> HourlyPoint:
    """Parse one hourly forecast entry.

    Raises:
        ValueError: When temperature, wind or rainfall is unparseable.
    """
    temperature = parse_temperature(select_text(item, ".weather-temperature > span"))
    feels_like_text = select_text(item, ".weather-temperature-feelslike")
    feels_like = parse_temperature(feels_like_text) if feels_like_text else temperature

    symbol = item.select_one(".weather-symbol > span")
    classes = list(symbol.get("class") or []) if symbol is not None else []

    return HourlyPoint(
        hour=select_text(item, "time"),
        weather_symbol=weather_symbol(classes),
        temperature=temperature,
        temperature_feels_like=feels_like,
        wind_speed=parse_int(select_text(item, ".weather-wind > .weather-value")),
        rainfall=parse_millimetres(select_text(item, ".weather-precipitation-amount")),
    )


def parse_hourly(doc: BeautifulSoup) -> tuple[HourlyPoint, ...]:
    """Parse up to 24 hourly points, in page (chronological) order."""
    points = []
    for item in doc.select(HOURS)[:MAX_HOURS]:
        try:
            points.append(_parse_hour(item))
        except ValueError as exc:
            logger.debug("Skipping hourly point: %s", exc)
    return tuple(points)


def extract(doc: BeautifulSoup) -> WeatherRecord:
    """Extract current conditions and forecasts from an Ampparit city page."""
    city = require_text(doc, CITY, "city")

    min_tomorrow = select_text(doc, f"{TOMORROW} .weather-min-temperature")
    min_tomorrow = min_tomorrow.replace("alin", "").strip()

    return WeatherRecord(
        city=city,
        temperature=optional(parse_temperature, select_text(doc, TEMPERATURE), 0.0, "temperature"),
        temperature_feels_like=optional(
            parse_temperature,
            select_text(doc, TEMPERATURE_FEELS_LIKE),
            0.0,
            "temperature feels like",
        ),
        rainfall=optional(parse_millimetres, select_text(doc, RAINFALL), 0.0, "rainfall"),
        observation_hour=optional(
            _observation_hour, select_text(doc, OBSERVATION_HOUR), 0, "observation hour"
        ),
        hourly_forecast=parse_hourly(doc),
        temperature_tomorrow=optional(
            parse_temperature,
            select_text(doc, f"{TOMORROW} .weather-temperature"),
            0.0,
            "temperature tomorrow",
        ),
        temperature_min_tomorrow=optional(
            parse_temperature, min_tomorrow, 0.0, "temperature min tomorrow"
        ),
    )


SOURCE = WeatherSource(name="ampparit", url=URL, extract=extract)
