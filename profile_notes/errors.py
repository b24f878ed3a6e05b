"""Exception types raised by profile_notes."""

from typing import Optional


class ProfileNotesError(Exception):
    """Base class for all profile_notes errors."""


class MalformedRecordError(ProfileNotesError):
    """A profile record is missing one of its required top-level fields."""


class TransformError(ProfileNotesError):
    """A single work/education entry could not be rendered.

    Aborts the whole transformation; no partial note is produced.
    """

    def __init__(self, message: str, section: str = "", index: Optional[int] = None):
        self.section = section
        self.index = index
        if section and index is not None:
            message = f"{section}[{index}]: {message}"
        super().__init__(message)


class EmptyQueryError(ProfileNotesError, ValueError):
    """No search parameters were given, so no remote call should be made."""


class DataSourceError(ProfileNotesError):
    """The remote profile API failed or returned an error payload."""


class ConfigError(ProfileNotesError):
    """Configuration is unusable for the requested operation."""
