"""Unit tests for résumé parsing."""

import pytest

from atscore.contexts.intake.exceptions import InvalidInputError
from atscore.contexts.intake.resume_parser import (
    parse_education_entry,
    parse_experience,
    parse_resume,
    split_list_items,
    split_sections,
    split_title_company,
)


@pytest.mark.unit
class TestParseSampleResume:
    """Test parsing of the shared sample résumé."""

    def test_contact(self, sample_resume):
        contact = parse_resume(sample_resume).contact

        assert contact.name == "Jane Doe"
        assert contact.email == "jane.doe@example.com"
        assert contact.phone == "(555) 123-4567"
        assert contact.location == "Austin, TX"
        assert contact.linkedin == "linkedin.com/in/janedoe"

    def test_summary(self, sample_resume):
        summary = parse_resume(sample_resume).summary

        assert summary.startswith("Backend engineer with 6 years")

    def test_experience(self, sample_resume):
        experience = parse_resume(sample_resume).experience

        assert len(experience) == 2
        first, second = experience
        assert first.title == "Senior Software Engineer"
        assert first.company == "Acme Corp"
        assert first.start_date == "Jan 2020"
        assert first.end_date == "Present"
        assert len(first.bullets) == 3
        assert first.bullets[0].startswith("Built the order service")
        assert second.company == "Initech"
        assert len(second.bullets) == 2

    def test_education(self, sample_resume):
        education = parse_resume(sample_resume).education

        assert len(education) == 1
        assert education[0].degree == "B.S."
        assert education[0].field == "Computer Science"
        assert education[0].institution == "State University"
        assert education[0].graduation_date == "2016"

    def test_skills_and_certifications(self, sample_resume):
        resume = parse_resume(sample_resume)

        assert resume.skills == ["Python", "Django", "AWS", "Docker", "PostgreSQL", "React", "Git"]
        assert resume.certifications == ["AWS Certified Solutions Architect"]
        assert resume.warnings == []


@pytest.mark.unit
class TestMissingSections:
    """Test absent sections produce empty values, not errors."""

    def test_no_experience_header(self):
        resume = parse_resume("Jane Doe\njane@example.com\n\nSKILLS\nPython, Go\n")

        assert resume.experience == []
        assert resume.education == []
        assert resume.skills == ["Python", "Go"]
        assert "No experience section found" in resume.warnings

    def test_contact_only(self):
        resume = parse_resume("John Smith\njohn@example.com")

        assert resume.contact.name == "John Smith"
        assert resume.summary == ""

    @pytest.mark.parametrize("bad", ["", "   \n ", None, 42])
    def test_invalid_input(self, bad):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_resume(bad)

        assert exc_info.value.field_name == "resume_text"


@pytest.mark.unit
class TestSectionSplitting:
    def test_inline_header_content(self):
        sections = split_sections("Jane Doe\nSkills: Python, Go\n")

        assert sections["preamble"] == ["Jane Doe"]
        assert sections["skills"] == ["Python, Go"]

    def test_repeated_header_extends_section(self):
        sections = split_sections("SKILLS\nPython\nEDUCATION\nState University\nSKILLS\nGo\n")

        assert sections["skills"] == ["Python", "Go"]


@pytest.mark.unit
class TestExperienceParsing:
    """Test job header and bullet handling."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("Software Engineer at Acme Corp", ("Software Engineer", "Acme Corp")),
            ("Data Analyst - Globex", ("Data Analyst", "Globex")),
            ("Designer | Initech | Remote", ("Designer", "Initech")),
            ("Product Manager, Hooli", ("Product Manager", "Hooli")),
            ("Freelancer", ("Freelancer", "")),
        ],
    )
    def test_split_title_company(self, line, expected):
        assert split_title_company(line) == expected

    def test_company_and_dates_on_next_line(self):
        entries = parse_experience(
            [
                "Backend Developer",
                "Globex Corporation",
                "• Shipped the payments API used by every storefront",
            ]
        )

        assert len(entries) == 1
        assert entries[0].title == "Backend Developer"
        assert entries[0].company == "Globex Corporation"
        assert len(entries[0].bullets) == 1

    def test_short_bullets_dropped(self):
        entries = parse_experience(["Engineer at Acme 2019 - 2021", "• Did QA", "• Automated the nightly release process"])

        assert entries[0].bullets == ["Automated the nightly release process"]
        assert entries[0].start_date == "2019"
        assert entries[0].end_date == "2021"

    def test_bullets_before_any_header_ignored(self):
        assert parse_experience(["• Automated the nightly release process"]) == []


@pytest.mark.unit
class TestEducationParsing:
    def test_degree_of_field(self):
        entry = parse_education_entry("Master of Science in Data Science, Tech Institute, 2020")

        assert entry.degree == "Master of Science"
        assert entry.field == "Data Science"
        assert entry.institution == "Tech Institute"
        assert entry.graduation_date == "2020"


@pytest.mark.unit
class TestListSplitting:
    def test_category_labels_and_conjunctions(self):
        items = split_list_items(["Languages: Python, Go and Rust", "Tools: Git; Docker"], (2, 50), strip_labels=True)

        assert items == ["Python", "Go and Rust", "Git", "Docker"]

    def test_length_range(self):
        assert split_list_items(["C, Python, " + "x" * 60], (2, 50)) == ["Python"]
