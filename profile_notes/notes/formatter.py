"""Render a profile record as a markdown note for the knowledge base."""

import logging
from collections.abc import Mapping
from typing import Union

from profile_notes.errors import TransformError
from profile_notes.notes.references import EntityReferenceTable
from profile_notes.profile.models import EducationEntry, JobEntry, NoteDocument, ProfileRecord

logger = logging.getLogger("profile_notes.notes")

DEFAULT_LOCALE = "en_US"
DEFAULT_TAG = "#person"
FOOTER_SEPARATOR = "---"

BACKGROUND_HEADER = "## Background"
WORK_HEADER = "### Work"
EDUCATION_HEADER = "### Education"


def format_profile(
    profile: Union[ProfileRecord, Mapping],
    locale: str = DEFAULT_LOCALE,
    tag: str = DEFAULT_TAG,
) -> NoteDocument:
    """Build the note title and body for a profile.

    Accepts either a parsed ProfileRecord or the raw API JSON. Raises
    MalformedRecordError for missing required fields and TransformError for
    an entry that cannot be rendered; nothing partial is returned.
    """
    if not isinstance(profile, ProfileRecord):
        profile = ProfileRecord.from_dict(profile)

    references = EntityReferenceTable()
    work_lines = render_work_section(profile.positions, references, locale)
    education_lines = render_education_section(profile.educations, references)

    lines = render_preamble(profile.headline, profile.summary)
    lines.append(BACKGROUND_HEADER)
    lines.append(WORK_HEADER)
    lines.extend(work_lines)
    lines.append(EDUCATION_HEADER)
    lines.extend(education_lines)
    lines.append("")
    lines.append(FOOTER_SEPARATOR)
    lines.append(tag)

    logger.debug(
        "Formatted %s: %d positions, %d educations, %d linked names",
        profile.full_name, len(profile.positions), len(profile.educations), len(references),
    )
    return NoteDocument(title=profile.full_name, body="\n".join(lines) + "\n")


def render_preamble(headline: str, summary: str) -> list[str]:
    lines = []
    if headline:
        lines.append(f"*{headline}*")
    # Empty line stands in for a missing summary
    lines.append(summary)
    lines.append("")
    return lines


def render_work_section(
    positions, references: EntityReferenceTable, locale: str = DEFAULT_LOCALE
) -> list[str]:
    """Render work entries: ongoing positions first, newest-processed on top,
    followed by past positions in input order."""
    current: list[list[str]] = []
    past: list[list[str]] = []

    for index, job in enumerate(positions):
        try:
            block = render_job(job, references, locale)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise TransformError(f"cannot render position: {e!r}", "positions", index) from e
        if job.is_current:
            current.insert(0, block)
        else:
            past.append(block)

    return [line for block in current + past for line in block]


def render_job(job: JobEntry, references: EntityReferenceTable, locale: str = DEFAULT_LOCALE) -> list[str]:
    title = job_display_title(job, locale)
    company = references.render(job.company_name.get(locale))

    if job.is_current:
        dates = f"since {job.start.to_text()}"
    else:
        dates = f"from {job.start.to_text()} to {job.end.to_text()}"

    lines = [f"**{title}** at {company} {dates}."]
    if job.location:
        lines.append(f"- {job.location}")
    lines.extend(bullet_lines(job.description))
    return lines


def job_display_title(job: JobEntry, locale: str = DEFAULT_LOCALE) -> str:
    title = job.title.get(locale)
    if job.employment_type == "Internship" and "Intern" not in title:
        title += " Intern"
    return title


def render_education_section(educations, references: EntityReferenceTable) -> list[str]:
    lines = []
    for index, school in enumerate(educations):
        try:
            lines.extend(render_education(school, references))
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise TransformError(f"cannot render education: {e!r}", "educations", index) from e
    return lines


def render_education(school: EducationEntry, references: EntityReferenceTable) -> list[str]:
    studied = " ".join(part for part in (school.field_of_study, degree_text(school.degree)) if part)
    line = f"{studied} from " if studied else "from "
    line += references.render(school.school_name)
    line += f", {school.end.year}." if school.end.year != 0 else "."

    lines = [line]
    lines.extend(bullet_lines(school.description))
    lines.extend(bullet_lines(school.activities))
    return lines


def degree_text(degree: str) -> str:
    """Drop a ``<level>-`` prefix such as ``Bachelor-``."""
    if "-" in degree:
        return degree.split("-", 1)[1].strip()
    return degree


def bullet_lines(text: str) -> list[str]:
    return [f"- {line.strip()}" for line in text.splitlines() if line.strip()]
