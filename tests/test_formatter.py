"""Tests for the profile note formatter."""

import copy

import pytest

from profile_notes.errors import MalformedRecordError, TransformError
from profile_notes.notes.formatter import (
    degree_text,
    format_profile,
    job_display_title,
    render_education,
    render_job,
)
from profile_notes.notes.references import EntityReferenceTable
from profile_notes.profile.models import EducationEntry, JobEntry, ProfileRecord


def job(title, company, start=(0, 2020), end=(0, 0), employment_type="Full-time", **extra):
    entry = {
        "multiLocaleTitle": {"en_US": title},
        "multiLocaleCompanyName": {"en_US": company},
        "employmentType": employment_type,
        "start": {"month": start[0], "year": start[1]},
        "end": {"month": end[0], "year": end[1]},
    }
    entry.update(extra)
    return entry


def profile(positions=(), educations=(), **extra):
    record = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "positions": list(positions),
        "educations": list(educations),
    }
    record.update(extra)
    return record


@pytest.fixture
def sample_profile():
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "headline": "Engineer at Acme",
        "summary": "Builds analytical engines.",
        "position": [
            job("Software Engineer", "Acme", start=(3, 2021), location="London, UK",
                description="Built things\nLed team\n"),
            job("Engineer", "Globex", start=(0, 2018), end=(8, 2018), employment_type="Internship"),
            job("Research Intern", "Acme", start=(6, 2017), end=(9, 2017), employment_type="Internship"),
            job("Advisor", "Initech", start=(1, 2022)),
        ],
        "educations": [
            {
                "fieldOfStudy": "Mathematics",
                "degree": "Bachelor-Science",
                "schoolName": "University of London",
                "end": {"year": 2016},
                "activities": "Chess club\nRowing",
            },
            {"degree": "Certificate", "schoolName": "Globex", "end": {"year": 0}},
        ],
    }


class TestFormatProfile:
    def test_full_document(self, sample_profile):
        note = format_profile(sample_profile)
        assert note.title == "Ada Lovelace"
        assert note.body == (
            "*Engineer at Acme*\n"
            "Builds analytical engines.\n"
            "\n"
            "## Background\n"
            "### Work\n"
            "**Advisor** at [[Initech]] since 1/2022.\n"
            "**Software Engineer** at [[Acme]] since 3/2021.\n"
            "- London, UK\n"
            "- Built things\n"
            "- Led team\n"
            "**Engineer Intern** at [[Globex]] from 2018 to 8/2018.\n"
            "**Research Intern** at Acme from 6/2017 to 9/2017.\n"
            "### Education\n"
            "Mathematics Science from [[University of London]], 2016.\n"
            "- Chess club\n"
            "- Rowing\n"
            "Certificate from Globex.\n"
            "\n"
            "---\n"
            "#person\n"
        )

    def test_empty_sections_keep_headers(self):
        note = format_profile(profile())
        assert note.body == "\n\n## Background\n### Work\n### Education\n\n---\n#person\n"

    def test_idempotent(self, sample_profile):
        assert format_profile(sample_profile) == format_profile(copy.deepcopy(sample_profile))

    def test_accepts_parsed_record(self, sample_profile):
        record = ProfileRecord.from_dict(sample_profile)
        assert format_profile(record) == format_profile(sample_profile)

    def test_headline_without_summary(self):
        note = format_profile(profile(headline="CTO"))
        assert note.body.startswith("*CTO*\n\n\n## Background\n")

    def test_custom_tag(self):
        note = format_profile(profile(), tag="#contact")
        assert note.body.endswith("---\n#contact\n")

    def test_current_positions_above_past_in_reverse_order(self):
        note = format_profile(profile(positions=[
            job("Old", "A", end=(1, 2010)),
            job("First current", "B"),
            job("Older", "C", end=(1, 2009)),
            job("Second current", "D"),
        ]))
        lines = [ln for ln in note.body.splitlines() if ln.startswith("**")]
        assert lines == [
            "**Second current** at [[D]] since 2020.",
            "**First current** at [[B]] since 2020.",
            "**Old** at [[A]] from 2020 to 1/2010.",
            "**Older** at [[C]] from 2020 to 1/2009.",
        ]

    def test_company_linked_only_once_across_sections(self):
        note = format_profile(profile(
            positions=[job("Dev", "Acme", end=(0, 2019)), job("Lead", "Acme", end=(0, 2021))],
            educations=[{"degree": "BSc", "schoolName": "Acme", "end": {"year": 2015}}],
        ))
        assert note.body.count("[[Acme]]") == 1
        assert "**Lead** at Acme from 2020 to 2021." in note.body
        assert "BSc from Acme, 2015." in note.body

    def test_link_table_follows_processing_order_not_layout(self):
        # The past job is processed first, so it carries the link even though
        # the current job is shown above it.
        note = format_profile(profile(positions=[
            job("Past", "Acme", end=(0, 2019)),
            job("Now", "Acme"),
        ]))
        assert "**Now** at Acme since 2020." in note.body
        assert "**Past** at [[Acme]] from 2020 to 2019." in note.body

    def test_entity_match_is_exact(self):
        note = format_profile(profile(positions=[
            job("A", "Acme", end=(0, 2019)),
            job("B", "acme", end=(0, 2019)),
            job("C", "Acme Corp", end=(0, 2019)),
        ]))
        assert "[[Acme]]" in note.body
        assert "[[acme]]" in note.body
        assert "[[Acme Corp]]" in note.body

    def test_school_seen_as_company_is_plain(self):
        note = format_profile(profile(
            positions=[job("Engineer", "Acme", employment_type="Internship")],
            educations=[{"degree": "Bachelor-Computer Science", "schoolName": "Acme", "end": {"year": 0}}],
        ))
        assert "**Engineer Intern** at [[Acme]] since 2020." in note.body
        assert "\nComputer Science from Acme.\n" in note.body


class TestFormatProfileErrors:
    @pytest.mark.parametrize("missing", ["firstName", "lastName", "positions", "educations"])
    def test_missing_required_field(self, missing):
        record = profile()
        del record[missing]
        with pytest.raises(MalformedRecordError, match=missing):
            format_profile(record)

    def test_not_a_mapping(self):
        with pytest.raises(MalformedRecordError):
            format_profile(["Ada", "Lovelace"])

    def test_missing_locale_is_transform_error(self):
        entry = job("Engineer", "Acme")
        entry["multiLocaleTitle"] = {"de_DE": "Ingenieur"}
        with pytest.raises(TransformError) as exc_info:
            format_profile(profile(positions=[job("Ok", "Fine"), entry]))
        assert exc_info.value.section == "positions"
        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_other_locale_selected(self):
        entry = job("Engineer", "Acme")
        entry["multiLocaleTitle"]["de_DE"] = "Ingenieur"
        entry["multiLocaleCompanyName"]["de_DE"] = "Acme GmbH"
        note = format_profile(profile(positions=[entry]), locale="de_DE")
        assert "**Ingenieur** at [[Acme GmbH]] since 2020." in note.body

    def test_bad_education_entry(self):
        with pytest.raises(TransformError) as exc_info:
            format_profile(profile(educations=[{"degree": "BSc"}]))
        assert exc_info.value.section == "educations"
        assert exc_info.value.index == 0

    def test_bad_date_shape(self):
        entry = job("Engineer", "Acme")
        entry["start"] = "2020"
        with pytest.raises(TransformError):
            format_profile(profile(positions=[entry]))


class TestRenderJob:
    def test_intern_suffix_added(self):
        entry = JobEntry.from_dict(job("Engineer", "Acme", employment_type="Internship"))
        assert job_display_title(entry) == "Engineer Intern"

    def test_intern_suffix_not_duplicated(self):
        entry = JobEntry.from_dict(job("Summer Internship Program", "Acme", employment_type="Internship"))
        assert job_display_title(entry) == "Summer Internship Program"

    def test_non_internship_untouched(self):
        entry = JobEntry.from_dict(job("Engineer", "Acme", employment_type="Contract"))
        assert job_display_title(entry) == "Engineer"

    def test_current_without_month(self):
        entry = JobEntry.from_dict(job("Engineer", "Acme", start=(0, 2020), employment_type="Internship"))
        lines = render_job(entry, EntityReferenceTable())
        assert lines == ["**Engineer Intern** at [[Acme]] since 2020."]

    def test_past_with_months(self):
        entry = JobEntry.from_dict(job("Engineer", "Acme", start=(2, 2019), end=(11, 2020)))
        lines = render_job(entry, EntityReferenceTable())
        assert lines == ["**Engineer** at [[Acme]] from 2/2019 to 11/2020."]

    def test_blank_description_lines_skipped(self):
        entry = JobEntry.from_dict(job("Engineer", "Acme", description="one\n\n  two  \n"))
        lines = render_job(entry, EntityReferenceTable())
        assert lines[1:] == ["- one", "- two"]


class TestRenderEducation:
    def test_degree_prefix_removed(self):
        assert degree_text("Bachelor-Computer Science") == "Computer Science"
        assert degree_text("Master - Data Science - Honours") == "Data Science - Honours"
        assert degree_text("PhD") == "PhD"

    def test_graduation_year_and_bullets(self):
        school = EducationEntry.from_dict({
            "fieldOfStudy": "Physics",
            "degree": "BSc",
            "schoolName": "MIT",
            "description": "Thesis on optics",
            "activities": "Band",
            "end": {"year": 2010},
        })
        lines = render_education(school, EntityReferenceTable())
        assert lines == ["Physics BSc from [[MIT]], 2010.", "- Thesis on optics", "- Band"]
