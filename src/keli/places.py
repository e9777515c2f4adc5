"""Known place names offered by the UI (one name per line in a text file)."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - used at runtime


def load_places(path: Path) -> list[str]:
    """
    Read place names from ``path``.

    Blank lines are skipped; order is preserved.

    Raises:
        FileNotFoundError: When the file does not exist.
    """
    with path.open(encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]
