"""Unit tests for the tailoring building blocks."""

import copy
import random
from types import SimpleNamespace

import pytest

from atscore.contexts.intake.resume_data_structure import ExperienceEntry, ParsedResume
from atscore.contexts.intake.resume_parser import parse_resume
from atscore.contexts.tailoring.changes import Change
from atscore.contexts.tailoring.optimizer import ResumeOptimizer, insert_keyword, relevance_order
from atscore.contexts.tailoring.resume_writer import (
    ResumeWriter,
    format_education_line,
    format_job_header,
)
from atscore.contexts.tailoring.verb_enhancer import VerbEnhancer
from atscore.utils.config import get_config

DASHBOARD_BULLET = "Developed reporting dashboards for finance teams using React."


def resume_with_bullets(*bullets) -> ParsedResume:
    return ParsedResume(
        experience=[ExperienceEntry(title=f"Engineer {i}", bullets=[bullet]) for i, bullet in enumerate(bullets)]
    )


@pytest.fixture(scope="module")
def optimizer():
    return ResumeOptimizer()


@pytest.mark.unit
class TestInsertKeyword:
    """Test anchor-phrase keyword insertion."""

    def test_using_anchor(self):
        assert insert_keyword("Built the storefront using React.", "GraphQL") == (
            "Built the storefront using React, GraphQL."
        )

    def test_with_anchor(self):
        assert insert_keyword("Shipped APIs with Go and gRPC", "Redis") == "Shipped APIs with Go and gRPC, Redis"

    def test_first_anchor_only(self):
        bullet = "Migrated jobs in Airflow using Python; tested in staging"

        assert insert_keyword(bullet, "Docker") == "Migrated jobs in Airflow using Python, Docker; tested in staging"

    def test_no_anchor(self):
        assert insert_keyword("Led the platform team", "Kafka") == "Led the platform team"

    def test_dotted_token_kept_whole(self):
        bullet = "Built a REST API platform using Node.js and Express for clients"

        assert insert_keyword(bullet, "GraphQL") == (
            "Built a REST API platform using Node.js and Express for clients, GraphQL"
        )

    def test_dotted_token_before_sentence_end(self):
        assert insert_keyword("Shipped dashboards with Vue.js.", "Redis") == "Shipped dashboards with Vue.js, Redis."


@pytest.mark.unit
class TestIntegrateKeywords:
    """Test keyword integration guards."""

    def test_inserted_into_first_bullet(self, optimizer):
        resume = resume_with_bullets(DASHBOARD_BULLET)

        changes = optimizer.integrate_keywords(resume, ["GraphQL"])

        assert resume.experience[0].bullets[0] == (
            "Developed reporting dashboards for finance teams using React, GraphQL."
        )
        assert len(changes) == 1
        assert changes[0].type == "keyword_added"
        assert changes[0].location == "experience[0].bullets[0]"
        assert changes[0].original == DASHBOARD_BULLET

    def test_density_limit(self, optimizer):
        resume = resume_with_bullets("Built APIs using Go.")

        assert optimizer.integrate_keywords(resume, ["GraphQL"]) == []
        assert resume.experience[0].bullets[0] == "Built APIs using Go."

    def test_growth_limit(self):
        config = copy.deepcopy(get_config("scoring"))
        config["optimizer"]["max_bullet_growth"] = 1.0
        optimizer = ResumeOptimizer(config=config)

        assert optimizer.integrate_keywords(resume_with_bullets(DASHBOARD_BULLET), ["GraphQL"]) == []

    def test_keyword_already_present(self, optimizer):
        assert optimizer.integrate_keywords(resume_with_bullets(DASHBOARD_BULLET), ["react"]) == []

    def test_one_keyword_per_entry_and_capped(self, optimizer):
        resume = resume_with_bullets(*([DASHBOARD_BULLET] * 5))

        changes = optimizer.integrate_keywords(resume, ["GraphQL", "Redis", "Kafka", "Docker", "Go"])

        assert [c.location for c in changes] == [
            "experience[0].bullets[0]",
            "experience[1].bullets[0]",
            "experience[2].bullets[0]",
        ]
        assert resume.experience[1].bullets[0].endswith("React, Redis.")
        assert resume.experience[3].bullets[0] == DASHBOARD_BULLET

    def test_entry_without_bullets_skipped(self, optimizer):
        resume = ParsedResume(experience=[ExperienceEntry(title="Engineer")])

        assert optimizer.integrate_keywords(resume, ["GraphQL"]) == []


@pytest.mark.unit
class TestAddSkills:
    def test_appends_only_unmentioned(self, optimizer):
        resume = ParsedResume(skills=["Python", "Amazon AWS"])

        changes = optimizer.add_skills(resume, ["AWS", "Kubernetes"])

        assert resume.skills == ["Python", "Amazon AWS", "Kubernetes"]
        assert [(c.location, c.modified) for c in changes] == [("skills", "Kubernetes")]


@pytest.mark.unit
class TestRelevanceOrder:
    def test_descending_hits(self):
        texts = ["no match", "python here", "python and docker"]

        assert relevance_order(texts, ["python", "docker"]) == [2, 1, 0]

    def test_stable_for_ties(self):
        assert relevance_order(["b python", "a python", "c"], ["python"]) == [0, 1, 2]
        assert relevance_order(["x", "y"], []) == [0, 1]


@pytest.mark.unit
class TestReorderContent:
    """Test relevance reordering of jobs and bullets."""

    def analysis(self, *keywords):
        return SimpleNamespace(matched_keywords=list(keywords), matched_skills=list(keywords))

    def test_jobs_reordered_without_loss(self, optimizer):
        resume = ParsedResume(
            experience=[
                ExperienceEntry(title="Barista", bullets=["Served coffee to regulars"]),
                ExperienceEntry(title="Engineer", bullets=["Shipped Python services"]),
            ]
        )
        before = copy.deepcopy(resume.experience)

        changes = optimizer.reorder_content(resume, self.analysis("Python"))

        assert [e.title for e in resume.experience] == ["Engineer", "Barista"]
        assert sorted(e.title for e in resume.experience) == sorted(e.title for e in before)
        assert changes[0].type == "content_reordered"
        assert changes[0].location == "experience"

    def test_bullets_reordered(self, optimizer):
        resume = ParsedResume(
            experience=[ExperienceEntry(title="Engineer", bullets=["Ran standups", "Wrote Docker images"])]
        )

        changes = optimizer.reorder_content(resume, self.analysis("Docker"))

        assert resume.experience[0].bullets == ["Wrote Docker images", "Ran standups"]
        assert [c.location for c in changes] == ["experience[0].bullets"]

    def test_already_ordered_is_unchanged(self, optimizer):
        resume = ParsedResume(
            experience=[ExperienceEntry(title="Engineer", bullets=["Wrote Docker images", "Ran standups"])]
        )

        assert optimizer.reorder_content(resume, self.analysis("Docker")) == []


@pytest.mark.unit
class TestApplyLiteralChanges:
    """Test verbatim substitution into the original text."""

    def test_substitutes_first_occurrence(self):
        text = "HEADER\n• Built it using React.\n• Built it using React.\n"
        change = Change("keyword_added", "experience[0].bullets[0]", "Built it using React.", "Built it using React, Redux.", "", "high")

        new_text, applied = ResumeOptimizer.apply_literal_changes(text, [change])

        assert new_text == "HEADER\n• Built it using React, Redux.\n• Built it using React.\n"
        assert applied == [change]

    def test_missing_original_dropped(self):
        change = Change("keyword_added", "experience[0].bullets[0]", "Not in the text", "x", "", "high")

        new_text, applied = ResumeOptimizer.apply_literal_changes("unchanged", [change])

        assert new_text == "unchanged"
        assert applied == []


@pytest.mark.unit
class TestVerbEnhancer:
    """Test weak phrase and opening verb rewriting."""

    @pytest.fixture
    def enhancer(self):
        config = get_config("scoring")
        return VerbEnhancer(config["weak_phrases"], config["strong_verbs"])

    def test_weak_phrase_replaced(self, enhancer):
        assert enhancer.enhance("Responsible for the deployment pipeline") == "Led the deployment pipeline"

    def test_weak_phrase_case_insensitive(self):
        enhancer = VerbEnhancer({"worked on": "Developed"}, ["Led"])

        assert enhancer.enhance("Worked on the billing service") == "Developed the billing service"

    def test_gerund_opening_replaced(self):
        enhancer = VerbEnhancer({}, ["Led"])

        assert enhancer.enhance("Managing the PostgreSQL migration") == "Led the PostgreSQL migration"

    @pytest.mark.parametrize(
        "bullet",
        ["Led the platform team", "Mentored four junior engineers", "Quarterly planning for the org"],
    )
    def test_left_alone(self, enhancer, bullet):
        assert enhancer.enhance(bullet) == bullet

    def test_deterministic_without_rng(self, enhancer):
        assert enhancer.enhance("Builds data pipelines") == enhancer.enhance("Builds data pipelines")

    def test_rng_choice(self):
        enhancer = VerbEnhancer({}, ["Led", "Designed"], rng=random.Random(7))

        assert enhancer.enhance("Builds data pipelines") in ("Led data pipelines", "Designed data pipelines")


@pytest.mark.unit
class TestResumeWriter:
    """Test plain-text rendering."""

    def test_job_header(self):
        assert format_job_header(ExperienceEntry("Engineer", "Acme", "2020", "Present")) == (
            "Engineer | Acme | 2020 - Present"
        )
        assert format_job_header(ExperienceEntry("Engineer")) == "Engineer"

    def test_round_trip(self, sample_resume):
        resume = parse_resume(sample_resume)

        reparsed = parse_resume(ResumeWriter().render(resume))

        assert reparsed.contact == resume.contact
        assert reparsed.summary == resume.summary
        assert reparsed.experience == resume.experience
        assert reparsed.education == resume.education
        assert reparsed.skills == resume.skills
        assert reparsed.certifications == resume.certifications

    def test_education_line(self, sample_resume):
        entry = parse_resume(sample_resume).education[0]

        assert format_education_line(entry) == "B.S. in Computer Science, State University, 2016"

    def test_single_trailing_newline(self):
        text = ResumeWriter().render(ParsedResume(skills=["Python"]))

        assert text == "SKILLS\nPython\n"
