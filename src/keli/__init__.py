"""Keli - "what is the weather in city X", answered from several sources at once.

Architecture::

    datasources/   One module per upstream HTML page (URL + field extractor)
    fetch.py       Source fetcher and the concurrent fan-out/fan-in coordinator
    merge.py       Field-level precedence merge of partial records
    store.py       In-memory TTL cache keyed by normalized city name
    service.py     Aggregation facade: normalize -> cache -> fetch -> merge -> store
    renderers/     Pure record -> JSON / plain text / HTML
    server.py      HTTP routes (JSON API, text, HTML page, place list)
    services/      Shared utilities (HTTP client)

Data flow: caller -> service -> store (hit) | fetch -> merge -> store -> caller

Extension points - see each package's docstring for step-by-step guides:
  - New weather source:  datasources/__init__.py
  - New output format:   renderers/__init__.py
"""

__version__ = "0.1.0"

from keli.config import Settings
from keli.schemas import HourlyPoint, WeatherRecord
from keli.service import CityNotFoundError, get_weather_data

__all__ = [
    "CityNotFoundError",
    "HourlyPoint",
    "Settings",
    "WeatherRecord",
    "__version__",
    "get_weather_data",
]
