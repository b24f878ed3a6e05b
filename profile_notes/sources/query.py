"""People-search query strings and profile identifier parsing."""

import re
from typing import Optional
from urllib.parse import quote_plus, urlparse

from profile_notes.errors import EmptyQueryError

_PROFILE_PATH = re.compile(r"^/in/([^/?#]+)")


def build_search_query(
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    keywords: Optional[str] = None,
) -> str:
    """Assemble the search-people query string.

    Parameters are emitted in the order keywords, firstName, lastName and
    blank ones are skipped. Raises EmptyQueryError when all are blank.
    """
    params = []
    for name, value in (("keywords", keywords), ("firstName", first_name), ("lastName", last_name)):
        value = (value or "").strip()
        if value:
            params.append(f"{name}={quote_plus(value)}")

    if not params:
        raise EmptyQueryError("No search parameters provided.")
    return "&".join(params)


def resolve_username(identifier: str) -> str:
    """Return the profile username from a bare username or a profile URL."""
    value = (identifier or "").strip()
    if not value:
        raise ValueError("Empty profile identifier")

    if "linkedin.com" not in value.lower():
        return value.strip("/")

    if "://" not in value:
        value = f"https://{value}"
    match = _PROFILE_PATH.match(urlparse(value).path)
    if not match:
        raise ValueError(f"Invalid LinkedIn profile URL: {identifier}")
    return match.group(1)
