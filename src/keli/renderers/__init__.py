"""Pure rendering functions: WeatherRecord -> response body.

All renderers follow the same pattern:
  - Input: a merged ``WeatherRecord``
  - Output: str (JSON document, plain-text report or full HTML page)
  - No side effects, no I/O

Used by server.py and cli.py.

Public API:
  - render_json: camelCase JSON
  - render_text: Finnish plain-text report
  - render_html: weather page (Jinja2 template ``weather.html.j2``)

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a ``render_{name}(record) -> str``.
   Templates go in ``templates/`` and are rendered with ``render_template``.

2. Re-export it here and wire a ``format=`` value in ``server.py``.

3. Add tests: render a sample record and assert on the returned string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)


from keli.renderers.html import render_html  # noqa: E402
from keli.renderers.text import render_json, render_text, signed_temperature  # noqa: E402

__all__ = [
    "render_html",
    "render_json",
    "render_template",
    "render_text",
    "signed_temperature",
]
