"""Shared extraction contract and text parsing helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from bs4 import BeautifulSoup, Tag

from keli.schemas import WeatherRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Document -> partial record.  Raises ExtractionError on a missing mandatory field.
Extractor = Callable[[BeautifulSoup], WeatherRecord]

_TEMPERATURE_JUNK = str.maketrans({"°": None, "C": None, "F": None, ",": ".", "−": "-"})


class ExtractionError(ValueError):
    """A source page lacks a field that source cannot do without."""


@dataclass(frozen=True)
class WeatherSource:
    """One upstream page: ``url + city`` is fetched and fed to ``extract``."""

    name: str
    url: str
    extract: Extractor


# =============================================================================
# Document lookup
# =============================================================================


def select_text(doc: BeautifulSoup | Tag, selector: str) -> str:
    """Stripped text of the first element matching ``selector``, or ""."""
    element = doc.select_one(selector)
    if element is None:
        return ""
    return element.get_text(strip=True)


def require_text(doc: BeautifulSoup | Tag, selector: str, field: str) -> str:
    """Like ``select_text`` but a missing or empty element is an ExtractionError."""
    text = select_text(doc, selector)
    if not text:
        raise ExtractionError(f"missing {field} ({selector})")
    return text


# =============================================================================
# Value parsing
# =============================================================================


def parse_temperature(text: str) -> float:
    """Parse ``"-3,5 °C"`` style temperatures to float Celsius.

    Raises:
        ValueError: When nothing numeric is left after cleanup.
    """
    return float(text.translate(_TEMPERATURE_JUNK).strip())


def parse_millimetres(text: str) -> float:
    """Parse ``"0,4 mm"`` to 0.4."""
    return float(text.replace("mm", "").replace(",", ".").strip())


def parse_int(text: str) -> int:
    """Parse the leading integer of ``"14"`` / ``"14:00"`` / ``"5 m/s"``."""
    head = text.strip().split(":")[0].split()[0] if text.strip() else ""
    return int(head)


def optional(parse: Callable[[str], T], text: str, default: T, field: str) -> T:
    """Parse an optional field, falling back to its zero value."""
    if not text:
        return default
    try:
        return parse(text)
    except ValueError:
        logger.debug("Could not parse %s from %r", field, text)
        return default
