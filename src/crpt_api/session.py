"""HTTP session management for the CRPT API."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__


def create_session(user_agent: str | None = None, pool_size: int = 10) -> requests.Session:
    """
    Create a requests session with JSON headers and retries disabled.

    Failed requests are surfaced to the caller unchanged, so the adapter never
    retries on connection errors or status codes.

    Args:
        user_agent: Value for the User-Agent header (default: crpt-api/<version>)
        pool_size: Connection pool size, roughly the number of concurrent callers

    Returns:
        Configured requests.Session
    """
    session = requests.Session()

    # Redirects are handled by requests, not urllib3; RequestsTransport
    # disables them per request with allow_redirects=False.
    retry_strategy = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(
        max_retries=retry_strategy,
        pool_connections=pool_size,
        pool_maxsize=pool_size,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    session.headers.update(
        {
            "User-Agent": user_agent or f"crpt-api/{__version__}",
            "Accept": "application/json",
        }
    )

    return session
