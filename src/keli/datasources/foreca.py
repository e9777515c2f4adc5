"""Foreca daily summary: today's max/min temperature, wind and a short text.

Mandatory: today's maximum temperature.  A page without it is not a
forecast page for the requested city.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from keli.datasources.base import (
    ExtractionError,
    WeatherSource,
    optional,
    parse_int,
    parse_temperature,
    require_text,
    select_text,
)
from keli.schemas import WeatherRecord

URL = "https://www.foreca.fi/Finland/"

_TODAY = "#dailybox > div:nth-child(1) > a > div"
TEMPERATURE_MAX = f"{_TODAY} > p.tx > abbr"
TEMPERATURE_MIN = f"{_TODAY} > p.tn > abbr"
WIND_SPEED = f"{_TODAY} > p.w > span > em"
SUMMARY = ".today .day .txt"


def extract(doc: BeautifulSoup) -> WeatherRecord:
    """Extract today's figures from a Foreca city page."""
    max_text = require_text(doc, TEMPERATURE_MAX, "temperature max")
    try:
        temperature_max = parse_temperature(max_text)
    except ValueError as exc:
        raise ExtractionError(f"unparseable temperature max {max_text!r}") from exc

    # Only the first sentence of the daily text is kept
    summary = select_text(doc, SUMMARY).split(".")[0].strip()

    return WeatherRecord(
        temperature_max=temperature_max,
        temperature_min=optional(
            parse_temperature, select_text(doc, TEMPERATURE_MIN), 0.0, "temperature min"
        ),
        wind_speed=optional(parse_int, select_text(doc, WIND_SPEED), 0, "wind speed"),
        summary=summary,
    )


SOURCE = WeatherSource(name="foreca", url=URL, extract=extract)
