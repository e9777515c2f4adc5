"""Full HTML weather page."""

from __future__ import annotations

from keli.renderers import render_template
from keli.renderers.text import signed_temperature
from keli.schemas import WeatherRecord


def render_html(record: WeatherRecord) -> str:
    """Render the weather page for one city."""
    hours = [
        {
            "hour": point.hour,
            "symbol": point.weather_symbol,
            "temperature": signed_temperature(point.temperature),
            "wind_speed": point.wind_speed,
            "rainfall": f"{point.rainfall:.1f}",
        }
        for point in record.hourly_forecast
    ]
    updated = record.last_updated.strftime("%H:%M") if record.last_updated else ""
    return render_template(
        "weather.html.j2",
        record=record,
        hours=hours,
        temperature=signed_temperature(record.temperature),
        feels_like=signed_temperature(record.temperature_feels_like),
        temperature_min=signed_temperature(record.temperature_min),
        temperature_max=signed_temperature(record.temperature_max),
        tomorrow=signed_temperature(record.temperature_tomorrow),
        tomorrow_min=signed_temperature(record.temperature_min_tomorrow),
        updated=updated,
    )
