"""
Shared HTTP client with automatic retry and backoff.

Provides a pre-configured ``requests.Session`` that retries transient
failures (timeouts, connection resets, 429/5xx) with exponential backoff
and applies a default timeout to every request. Datasource modules should
use this instead of bare ``requests.get``.

Usage::

    from bird_finder.services.http import session

    resp = session.get("https://api.ebird.org/v2/ref/hotspot/geo", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from bird_finder import __version__

#: eBird rate-limits bursts with 429 and occasionally drops to 5xx.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,  # 0s, 1s, 2s between retries
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 20  # seconds

USER_AGENT = f"bird-finder/{__version__}"


class TimeoutHTTPAdapter(HTTPAdapter):
    """``HTTPAdapter`` that fills in a timeout when the caller passes none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retrying, timeout-aware adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Timeout used when a request does not pass one.
    """
    s = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


#: Module-level session - import and use directly.
session: requests.Session = create_session()
