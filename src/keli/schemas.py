"""
Domain models for keli.

Every source produces a *partial* ``WeatherRecord``: whatever it could not
find stays at its zero value ("" / 0 / 0.0 / ()).  The merger reconciles the
partials into one record; see ``keli.merge``.

Attribute names are snake_case; JSON uses the camelCase wire names.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class HourlyPoint(BaseModel):
    """One hour of the hourly forecast."""

    model_config = _MODEL_CONFIG

    hour: str = ""
    weather_symbol: str = Field(default="", alias="weather")
    temperature: float = 0.0
    temperature_feels_like: float = 0.0
    wind_speed: int = 0
    rainfall: float = 0.0
    rain_chance: int = 0


class WeatherRecord(BaseModel):
    """Weather for one city at one point in time."""

    model_config = _MODEL_CONFIG

    # Human-readable city name
    city: str = ""
    # Hour of the latest observation, 0 when unknown
    observation_hour: int = Field(default=0, ge=0, le=23)
    summary: str = Field(default="", alias="weatherSummary")

    # Celsius
    temperature: float = 0.0
    temperature_feels_like: float = 0.0
    temperature_min: float = 0.0
    temperature_max: float = 0.0

    # mm
    rainfall: float = 0.0
    snowfall: float = 0.0
    # m/s
    wind_speed: int = 0
    # percent
    rain_chance: int = 0

    temperature_tomorrow: float = 0.0
    temperature_min_tomorrow: float = 0.0

    # Source formatted time-of-day strings
    sunrise: str = ""
    sunset: str = ""
    # HH:MM
    day_length: str = ""

    hourly_forecast: tuple[HourlyPoint, ...] = ()

    # When the merge producing this record completed; None on partial records
    last_updated: datetime | None = None

    @property
    def is_empty(self) -> bool:
        """True when no source identified the city."""
        return not self.city
