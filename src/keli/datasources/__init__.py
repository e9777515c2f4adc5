"""Upstream weather pages and their field extractors.

Each module is one source with a consistent structure:

    datasources/{name}.py
      URL        Base URL; the normalized city name is appended to it
      extract()  BeautifulSoup document -> partial WeatherRecord
      SOURCE     WeatherSource(name, URL, extract)

Extraction contract
-------------------
- A field that cannot be found or parsed stays at its zero value.
- A field listed as mandatory for the source raises ``ExtractionError``;
  the fetcher logs it and the source contributes nothing to that request.

Adding a new source
-------------------
1. Create ``datasources/{name}.py`` with ``URL``, ``extract`` and ``SOURCE``,
   using the helpers in ``base.py`` (``select_text``, ``parse_temperature``,
   ``optional``).

2. Add ``SOURCE`` to ``DEFAULT_SOURCES`` below.  Position matters: the order
   is the merge precedence (strings first-wins, numbers last-non-zero-wins,
   see ``keli.merge``).

3. Add tests in ``tests/test_datasources.py`` with a trimmed HTML fixture.
"""

from keli.datasources import ampparit, foreca, moisio
from keli.datasources.base import ExtractionError, WeatherSource

#: Merge precedence order.
DEFAULT_SOURCES: tuple[WeatherSource, ...] = (
    foreca.SOURCE,
    ampparit.SOURCE,
    moisio.SOURCE,
)

__all__ = [
    "DEFAULT_SOURCES",
    "ExtractionError",
    "WeatherSource",
]
