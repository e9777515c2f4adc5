"""JSON and plain-text renderings of a weather record."""

from __future__ import annotations

from keli.schemas import WeatherRecord


def signed_temperature(celsius: float) -> str:
    """Format with an explicit plus sign for positive values: ``+3.0°C``."""
    if celsius > 0:
        return f"+{celsius:.1f}°C"
    return f"{celsius:.1f}°C"


def render_json(record: WeatherRecord) -> str:
    """Serialize with the camelCase wire names."""
    return record.model_dump_json(by_alias=True)


def render_text(record: WeatherRecord) -> str:
    """Short Finnish report suitable for chat bots and terminals."""
    lines = [
        f"Sää {record.city} (Klo. {record.observation_hour:02d})",
        record.summary,
        "",
        (
            f"Lämpötila: {signed_temperature(record.temperature)} "
            f"(Tuntuu kuin {signed_temperature(record.temperature_feels_like)})"
        ),
        f"Päivän alin: {signed_temperature(record.temperature_min)}",
        f"Päivän ylin: {signed_temperature(record.temperature_max)}",
        f"Sadetta: {record.rainfall:.1f} mm",
        f"Lunta: {record.snowfall:.1f} cm",
        f"Tuuli: {record.wind_speed} m/s",
        (
            f"Huomenna: {signed_temperature(record.temperature_tomorrow)} "
            f"(Alin: {signed_temperature(record.temperature_min_tomorrow)})"
        ),
        f"Auringonnousu: {record.sunrise}",
        f"Auringonlasku: {record.sunset}",
        f"Päivän pituus: {record.day_length}",
    ]
    return "\n".join(lines) + "\n"
