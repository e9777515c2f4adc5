"""
Field-level merge of partial weather records.

Partials arrive in source order and are reduced field by field:

- text fields: the first non-empty value wins
- numeric fields: the last non-zero value wins
- hourly forecast: the last non-empty sequence wins, replaced wholesale

The text/number asymmetry is deliberate.  With the default source order
(Foreca, Ampparit, Moisio) it makes Ampparit authoritative for current
temperatures while Foreca keeps the daily summary.  A measured zero cannot
be told apart from "not measured", so a later zero never masks an earlier
reading.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from keli.schemas import WeatherRecord

FIRST_WINS_FIELDS = (
    "city",
    "summary",
    "sunrise",
    "sunset",
    "day_length",
)

LAST_NONZERO_FIELDS = (
    "temperature",
    "temperature_feels_like",
    "temperature_min",
    "temperature_max",
    "rainfall",
    "snowfall",
    "wind_speed",
    "rain_chance",
    "observation_hour",
    "temperature_tomorrow",
    "temperature_min_tomorrow",
)


def merge_records(partials: Iterable[WeatherRecord]) -> WeatherRecord:
    """
    Reduce partial records into one.

    Args:
        partials: Records in merge precedence (source configuration) order.

    Returns:
        The merged record.  An empty ``city`` means no source identified the
        city; callers treat that as not found.  ``last_updated`` is left unset.
    """
    merged: dict[str, Any] = {}

    for partial in partials:
        for field in FIRST_WINS_FIELDS:
            value = getattr(partial, field)
            if value and not merged.get(field):
                merged[field] = value

        for field in LAST_NONZERO_FIELDS:
            value = getattr(partial, field)
            if value:
                merged[field] = value

        if partial.hourly_forecast:
            merged["hourly_forecast"] = tuple(partial.hourly_forecast)

    return WeatherRecord(**merged)
