"""
Concurrent retrieval of partial weather records.

``fetch_source`` fetches and extracts one source and never raises: any
network, parse or extraction failure is logged and turned into ``None``.

``fetch_all`` starts one worker per source, waits for every one of them to
finish (no early release, no cancellation) and returns the successful
partial records in source order, which is also the merge precedence order.
The wall-clock bound is the per-request timeout of the session.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from keli.datasources.base import ExtractionError, WeatherSource
from keli.schemas import WeatherRecord

logger = logging.getLogger(__name__)


def source_url(source: WeatherSource, city: str) -> str:
    """Return the page URL for ``city`` (already normalized)."""
    return source.url + quote(city, safe="")


def fetch_source(
    source: WeatherSource,
    city: str,
    *,
    session: requests.Session,
    log: logging.Logger = logger,
) -> WeatherRecord | None:
    """
    Fetch, parse and extract one source.

    Args:
        source: Source descriptor (URL prefix + extractor).
        city: Normalized city name appended to the URL.
        session: HTTP session; its timeout bounds this call.
        log: Sink for failures.

    Returns:
        The partial record, or None when any stage failed.
    """
    url = source_url(source, city)
    try:
        resp = session.get(url)
        resp.raise_for_status()
        doc = BeautifulSoup(resp.text, "html.parser")
        record = source.extract(doc)
    except requests.RequestException as exc:
        log.warning("Error fetching data from %s (%s): %s", source.name, url, exc)
        return None
    except ExtractionError as exc:
        log.warning("Error parsing weather data from %s (%s): %s", source.name, url, exc)
        return None
    except Exception:  # noqa: BLE001 - one broken source must not sink its siblings
        log.exception("Unexpected failure in source %s (%s)", source.name, url)
        return None

    log.debug("Found weather data for %s from %s: %r", city, source.name, record)
    return record


def fetch_all(
    sources: Sequence[WeatherSource],
    city: str,
    *,
    session: requests.Session,
    log: logging.Logger = logger,
) -> list[WeatherRecord]:
    """
    Fetch every source concurrently and collect the successes in source order.

    Returns:
        Zero to ``len(sources)`` partial records.
    """
    if not sources:
        return []

    with ThreadPoolExecutor(max_workers=len(sources), thread_name_prefix="keli-fetch") as pool:
        futures = [
            pool.submit(fetch_source, source, city, session=session, log=log)
            for source in sources
        ]
        # Join on all of them; result() never raises since fetch_source absorbs errors
        results = [future.result() for future in futures]

    partials = [record for record in results if record is not None]
    log.debug("%d of %d sources answered for %s", len(partials), len(sources), city)
    return partials
