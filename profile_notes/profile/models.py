"""Profile record data models built from LinkedIn Data API JSON."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from profile_notes.errors import MalformedRecordError, TransformError

REQUIRED_FIELDS = ("firstName", "lastName", "positions", "educations")


def _text(raw: Mapping, key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _int(raw: Mapping, key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    # bool is an int subclass but never a valid date part
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return value


def _as_mapping(raw, what: str) -> Mapping:
    if not isinstance(raw, Mapping):
        raise TypeError(f"{what} must be an object, got {type(raw).__name__}")
    return raw


@dataclass(frozen=True)
class LocalizedText:
    """A text field keyed by locale tag (e.g. ``en_US``).

    Some API responses only carry a plain string; it is kept as ``plain`` and
    returned for any locale when no locale map is present.
    """

    values: dict[str, str] = field(default_factory=dict)
    plain: Optional[str] = None

    @classmethod
    def from_entry(cls, raw: Mapping, map_key: str, plain_key: str) -> "LocalizedText":
        values = raw.get(map_key)
        if values is None:
            if raw.get(plain_key) is None:
                return cls()
            return cls(plain=_text(raw, plain_key))
        values = _as_mapping(values, map_key)
        return cls(values={str(k): v for k, v in values.items()})

    def get(self, locale: str) -> str:
        """Return the text for ``locale``; raises KeyError if it is absent."""
        if self.values:
            value = self.values[locale]
        elif self.plain is not None:
            value = self.plain
        else:
            raise KeyError(locale)
        if not isinstance(value, str):
            raise TypeError(f"localized value for {locale} must be a string")
        return value


@dataclass(frozen=True)
class YearMonth:
    """A month/year pair; 0 means unspecified (or ongoing for an end year)."""

    month: int = 0
    year: int = 0

    @classmethod
    def from_dict(cls, raw) -> "YearMonth":
        if raw is None:
            return cls()
        raw = _as_mapping(raw, "date")
        month = _int(raw, "month")
        if not 0 <= month <= 12:
            raise ValueError(f"month must be 0-12, got {month}")
        return cls(month=month, year=_int(raw, "year"))

    def to_text(self) -> str:
        """Render as ``m/yyyy``, or just ``yyyy`` when the month is unknown."""
        if self.month != 0:
            return f"{self.month}/{self.year}"
        return f"{self.year}"


@dataclass(frozen=True)
class JobEntry:
    title: LocalizedText
    company_name: LocalizedText
    employment_type: str = ""
    location: str = ""
    description: str = ""
    start: YearMonth = field(default_factory=YearMonth)
    end: YearMonth = field(default_factory=YearMonth)

    @property
    def is_current(self) -> bool:
        return self.end.year == 0

    @classmethod
    def from_dict(cls, raw) -> "JobEntry":
        raw = _as_mapping(raw, "position")
        return cls(
            title=LocalizedText.from_entry(raw, "multiLocaleTitle", "title"),
            company_name=LocalizedText.from_entry(raw, "multiLocaleCompanyName", "companyName"),
            employment_type=_text(raw, "employmentType"),
            location=_text(raw, "location"),
            description=_text(raw, "description"),
            start=YearMonth.from_dict(raw.get("start")),
            end=YearMonth.from_dict(raw.get("end")),
        )


@dataclass(frozen=True)
class EducationEntry:
    school_name: str
    field_of_study: str = ""
    degree: str = ""
    description: str = ""
    activities: str = ""
    end: YearMonth = field(default_factory=YearMonth)

    @classmethod
    def from_dict(cls, raw) -> "EducationEntry":
        raw = _as_mapping(raw, "education")
        if raw.get("schoolName") is None:
            raise KeyError("schoolName")
        return cls(
            school_name=_text(raw, "schoolName"),
            field_of_study=_text(raw, "fieldOfStudy"),
            degree=_text(raw, "degree"),
            description=_text(raw, "description"),
            activities=_text(raw, "activities"),
            end=YearMonth.from_dict(raw.get("end")),
        )


@dataclass(frozen=True)
class ProfileRecord:
    """A person's profile as returned by the profile endpoint."""

    first_name: str
    last_name: str
    positions: tuple[JobEntry, ...] = ()
    educations: tuple[EducationEntry, ...] = ()
    headline: str = ""
    summary: str = ""
    username: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, raw) -> "ProfileRecord":
        """Build a record from API JSON.

        Raises MalformedRecordError when a required top-level field is absent,
        and TransformError when an individual entry has an unexpected shape.
        """
        if not isinstance(raw, Mapping):
            raise MalformedRecordError("Profile record must be a JSON object")

        # The live endpoint calls the work history "position"
        fields = dict(raw)
        if fields.get("positions") is None and "position" in fields:
            fields["positions"] = fields["position"]

        missing = [name for name in REQUIRED_FIELDS if fields.get(name) is None]
        if missing:
            raise MalformedRecordError(f"Profile record missing required fields: {', '.join(missing)}")

        for name in ("positions", "educations"):
            if not isinstance(fields[name], (list, tuple)):
                raise MalformedRecordError(f"{name} must be a list")

        try:
            first_name = _text(fields, "firstName")
            last_name = _text(fields, "lastName")
            headline = _text(fields, "headline")
            summary = _text(fields, "summary")
            username = _text(fields, "username")
        except TypeError as e:
            raise MalformedRecordError(str(e)) from e

        return cls(
            first_name=first_name,
            last_name=last_name,
            positions=tuple(_parse_entries(fields["positions"], JobEntry, "positions")),
            educations=tuple(_parse_entries(fields["educations"], EducationEntry, "educations")),
            headline=headline,
            summary=summary,
            username=username,
        )


def _parse_entries(items, entry_cls, section: str) -> list:
    entries = []
    for index, item in enumerate(items):
        try:
            entries.append(entry_cls.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            raise TransformError(f"unexpected entry shape: {e!r}", section, index) from e
    return entries


@dataclass(frozen=True)
class SearchResultEntry:
    """One hit from the people search endpoint."""

    username: str
    full_name: str = ""
    location: str = ""
    headline: str = ""
    summary: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping) -> "SearchResultEntry":
        return cls(
            username=raw.get("username") or "",
            full_name=raw.get("fullName") or "",
            location=raw.get("location") or "",
            headline=raw.get("headline") or "",
            summary=raw.get("summary") or "",
        )

    def to_choice_string(self) -> str:
        """One-line description used when asking the user to pick a profile."""
        parts = [self.full_name or self.username]
        if self.location:
            parts.append(self.location)
        if self.headline:
            parts.append(self.headline)
        return " | ".join(parts)


@dataclass(frozen=True)
class NoteDocument:
    """A rendered note: file title plus markdown body."""

    title: str
    body: str

    def to_dict(self) -> dict:
        return {"title": self.title, "body": self.body}
