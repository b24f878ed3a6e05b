"""YAML config loading, saving and validation."""

import os
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from profile_notes.notes.formatter import DEFAULT_LOCALE, DEFAULT_TAG
from profile_notes.sources.linkedin_api import DEFAULT_API_HOST

API_KEY_ENV_VARS = ("PROFILE_NOTES_API_KEY", "RAPIDAPI_KEY")

_LOCALE_RE = re.compile(r"^[a-z]{2,3}_[A-Z]{2}$")


@dataclass
class ApiConfig:
    key: str = ""  # RapidAPI key with a LinkedIn Data API subscription
    host: str = DEFAULT_API_HOST
    timeout: int = 30
    max_retries: int = 3

    def resolved_key(self) -> str:
        """Key used for requests; env vars take precedence over the saved key."""
        return _api_key_from_env() or self.key


@dataclass
class NotesConfig:
    vault_dir: str = "vault"
    folder: str = ""
    locale: str = DEFAULT_LOCALE
    tag: str = DEFAULT_TAG


@dataclass
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    notes: NotesConfig = field(default_factory=NotesConfig)
    log_dir: str = "logs"


def _api_key_from_env() -> str:
    for name in API_KEY_ENV_VARS:
        if os.environ.get(name):
            return os.environ[name]
    return ""


def _or_default(value, default):
    return default if value is None else value


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from a YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml or run `profile-notes config --api-key KEY`."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return config_from_dict(raw)


def config_from_dict(raw: dict) -> AppConfig:
    config = AppConfig()

    # API; only the saved key is kept here, env overrides apply via resolved_key()
    api_raw = raw.get("api") or {}
    config.api = ApiConfig(
        key=api_raw.get("key") or "",
        host=api_raw.get("host") or DEFAULT_API_HOST,
        timeout=api_raw.get("timeout") or 30,
        max_retries=_or_default(api_raw.get("max_retries"), 3),
    )

    # Notes; a bare `tag: #person` is a YAML comment and loads as None
    notes_raw = raw.get("notes") or {}
    config.notes = NotesConfig(
        vault_dir=notes_raw.get("vault_dir") or "vault",
        folder=notes_raw.get("folder") or "",
        locale=notes_raw.get("locale") or DEFAULT_LOCALE,
        tag=notes_raw.get("tag") or DEFAULT_TAG,
    )

    config.log_dir = raw.get("log_dir") or "logs"

    return config


def save_config(config: AppConfig, config_path: str = "config.yaml") -> Path:
    """Write configuration back to YAML."""
    path = Path(config_path)
    if path.parent != Path(""):
        path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(config), f, sort_keys=False)

    return path


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if not config.api.resolved_key():
        warnings.append("No API key configured - profile lookups and searches will fail")

    if not config.api.host:
        warnings.append("No API host configured")

    if not _LOCALE_RE.match(config.notes.locale or ""):
        warnings.append(f"Locale '{config.notes.locale}' does not look like a locale tag such as en_US")

    if not config.notes.tag.startswith("#"):
        warnings.append(f"Note tag '{config.notes.tag}' does not start with '#'")

    return warnings


def mask_key(key: str) -> str:
    """Hide all but the last four characters of an API key."""
    if not key:
        return "(not set)"
    if len(key) <= 4:
        return "*" * len(key)
    return "*" * (len(key) - 4) + key[-4:]
