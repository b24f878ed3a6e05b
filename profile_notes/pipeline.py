"""Profile-to-note flows: lookup by identifier, and search-then-select."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from profile_notes.config import AppConfig
from profile_notes.notes.formatter import format_profile
from profile_notes.profile.models import NoteDocument, SearchResultEntry
from profile_notes.sources.linkedin_api import LinkedInDataClient
from profile_notes.sources.query import build_search_query, resolve_username
from profile_notes.storage.vault import NoteVault

logger = logging.getLogger("profile_notes.pipeline")

Chooser = Callable[[list[SearchResultEntry]], Optional[SearchResultEntry]]


def build_client(config: AppConfig) -> LinkedInDataClient:
    return LinkedInDataClient(
        api_key=config.api.resolved_key(),
        api_host=config.api.host,
        timeout=config.api.timeout,
        max_retries=config.api.max_retries,
    )


def build_vault(config: AppConfig) -> NoteVault:
    return NoteVault(config.notes.vault_dir)


@contextmanager
def client_scope(config: AppConfig, client: Optional[LinkedInDataClient] = None) -> Iterator[LinkedInDataClient]:
    """Yield ``client`` as-is, or a new client that is closed on exit."""
    if client is not None:
        yield client
        return
    with build_client(config) as owned:
        yield owned


def create_profile_note(
    config: AppConfig,
    identifier: str,
    vault: Optional[NoteVault] = None,
    client: Optional[LinkedInDataClient] = None,
    insert_into: Optional[str] = None,
    line: Optional[int] = None,
    column: int = 0,
    overwrite: bool = False,
) -> tuple[NoteDocument, Path]:
    """Fetch a profile by username or URL and store it as a note.

    With ``insert_into`` the note body goes into that existing note at the
    given cursor instead of a new file.
    """
    username = resolve_username(identifier)
    vault = vault or build_vault(config)

    logger.info("Fetching profile for %s", username)
    with client_scope(config, client) as api:
        raw = api.fetch_profile(username)
    document = format_profile(raw, locale=config.notes.locale, tag=config.notes.tag)

    if insert_into:
        path = vault.insert_text(insert_into, document.body, line=line, column=column)
    else:
        path = vault.create_note(document, folder=config.notes.folder, overwrite=overwrite)

    logger.info("Note for %s written to %s", document.title, path)
    return document, path


def search_profiles(
    config: AppConfig,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    keywords: Optional[str] = None,
    client: Optional[LinkedInDataClient] = None,
) -> list[SearchResultEntry]:
    """Search for people. Raises EmptyQueryError before any remote call."""
    query = build_search_query(first_name, last_name, keywords)
    with client_scope(config, client) as api:
        return api.search_people(query)


def search_and_create(
    config: AppConfig,
    choose: Chooser,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    keywords: Optional[str] = None,
    vault: Optional[NoteVault] = None,
    client: Optional[LinkedInDataClient] = None,
    overwrite: bool = False,
) -> Optional[tuple[NoteDocument, Path]]:
    """Search, let ``choose`` pick a result, then create its note.

    Returns None when nothing was found or nothing was chosen.
    """
    query = build_search_query(first_name, last_name, keywords)
    with client_scope(config, client) as api:
        results = api.search_people(query)
        if not results:
            logger.info("No profiles matched the search")
            return None

        chosen = choose(results)
        if chosen is None:
            logger.info("No profile selected")
            return None

        return create_profile_note(config, chosen.username, vault=vault, client=api, overwrite=overwrite)
