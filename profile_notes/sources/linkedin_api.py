"""LinkedIn Data API (RapidAPI) client: profile lookup and people search."""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from profile_notes.errors import ConfigError, DataSourceError
from profile_notes.profile.models import SearchResultEntry
from profile_notes.utils.http_client import create_session, get_json

logger = logging.getLogger("profile_notes.sources.linkedin")

DEFAULT_API_HOST = "linkedin-data-api.p.rapidapi.com"


class LinkedInDataClient:
    """Thin client for the profile and search-people endpoints."""

    def __init__(
        self,
        api_key: str,
        api_host: str = DEFAULT_API_HOST,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        if not api_key:
            raise ConfigError("No API key configured. Run `profile-notes config --api-key KEY` first.")
        self.api_host = api_host
        self.base_url = (base_url or f"https://{api_host}").rstrip("/")
        self.timeout = timeout
        self.session = session or create_session(api_key, api_host, max_retries=max_retries)

    def fetch_profile(self, username: str) -> dict:
        """Return the raw profile JSON for ``username``."""
        url = f"{self.base_url}/?username={quote(username, safe='')}"
        data = self._get(url)
        if not isinstance(data, dict):
            raise DataSourceError(f"Unexpected profile response for {username}")
        # Failed lookups come back as a 200 with success=false
        if data.get("success") is False:
            raise DataSourceError(data.get("message") or f"Profile lookup failed for {username}")
        logger.info("Fetched profile for %s", username)
        return data

    def search_people(self, query: str) -> list[SearchResultEntry]:
        """Run a people search with a query built by build_search_query."""
        data = self._get(f"{self.base_url}/search-people?{query}")
        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            raise DataSourceError(message or "Profile search failed")

        items = (data.get("data") or {}).get("items") or []
        results = [SearchResultEntry.from_dict(item) for item in items if isinstance(item, dict)]
        logger.info("Search '%s' returned %d profiles", query, len(results))
        return results

    def _get(self, url: str):
        try:
            return get_json(self.session, url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("HTTP request failed for %s: %s", url, e)
            raise DataSourceError(f"Request to {self.api_host} failed: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Response from {self.api_host} was not valid JSON") from e

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
