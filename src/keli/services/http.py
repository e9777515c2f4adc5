"""
Shared HTTP client for upstream weather pages.

Provides a pre-configured ``requests.Session`` with a default timeout and a
recognisable ``User-Agent``.  Upstream sources are never retried: a failed
source simply contributes nothing to that request, and the next request after
the cache expires is the retry.

Usage::

    from keli.services.http import create_session

    s = create_session(timeout=10)
    resp = s.get("https://www.ampparit.com/saa/Turku")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Connect/read errors and bad statuses fail straight through.
NO_RETRY = Retry(total=0, read=False, raise_on_status=False)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = "keli/0.1 (+https://github.com/keli-weather/keli)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` for fetching source pages.

    Args:
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Session.request always passes timeout=, None when the caller gave none.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
