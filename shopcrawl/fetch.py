from __future__ import annotations

from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .errors import TransportError, TransportErrorKind


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def create_session(user_agent: Optional[str] = None, pool_size: int = 4) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
            "Connection": "keep-alive",
        }
    )

    # One pooled connection per worker thread; failed fetches are not retried.
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_html(
    url: str,
    session: Optional[requests.Session] = None,
    timeout_seconds: float = 15,
) -> tuple[int, str]:
    """
    Fetch HTML document. Returns (status_code, html_text).
    Raises TransportError when the host cannot be reached or the status is not 2xx.
    """
    if not url:
        raise ValueError("url must be non-empty")
    sess = session or create_session()
    try:
        response = sess.get(url, timeout=timeout_seconds, allow_redirects=True)
    except requests.RequestException as exc:
        raise TransportError(url, TransportErrorKind.UNREACHABLE, cause=exc) from exc
    if not 200 <= response.status_code < 300:
        raise TransportError(url, TransportErrorKind.HTTP_ERROR, status=response.status_code)
    return response.status_code, response.text
