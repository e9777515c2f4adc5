"""Moisio sun table: sunrise, sunset and day length for today.

Mandatory: sunrise.  Times are kept exactly as the page formats them.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from keli.datasources.base import WeatherSource, require_text, select_text
from keli.schemas import WeatherRecord

URL = "http://www.moisio.fi/taivas/aurinko.php?paikka="

SUNRISE = "td.tbl0:nth-child(4)"
SUNSET = "td.tbl0:nth-child(5)"
DAY_LENGTH = "td.tbl0:nth-child(6)"


def extract(doc: BeautifulSoup) -> WeatherRecord:
    """Extract today's row of the sun table."""
    return WeatherRecord(
        sunrise=require_text(doc, SUNRISE, "sunrise"),
        sunset=select_text(doc, SUNSET),
        day_length=select_text(doc, DAY_LENGTH),
    )


SOURCE = WeatherSource(name="moisio", url=URL, extract=extract)
