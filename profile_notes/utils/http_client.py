"""HTTP session setup for the RapidAPI-hosted profile API."""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("profile_notes.http")

USER_AGENT = "profile-notes/0.1 (+https://rapidapi.com)"


def create_session(
    api_key: str,
    api_host: str,
    max_retries: int = 3,
    backoff_factor: float = 1.0,
) -> requests.Session:
    """Create a requests session with retry logic and RapidAPI auth headers."""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "x-rapidapi-key": api_key,
        "x-rapidapi-host": api_host,
    })

    return session


def get_json(session: requests.Session, url: str, timeout: int = 30, **kwargs):
    """GET ``url`` and decode the JSON body.

    Raises requests.RequestException on transport or HTTP status failures and
    ValueError if the body is not JSON.
    """
    logger.debug("GET %s", url)
    response = session.get(url, timeout=timeout, **kwargs)
    response.raise_for_status()
    return response.json()
