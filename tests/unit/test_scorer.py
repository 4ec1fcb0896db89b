"""Unit tests for the ATS scorer and suggestion rules."""

import copy

import pytest

from atscore.contexts.intake.job_data_structure import JobKeywords, ParsedJobDescription
from atscore.contexts.intake.resume_data_structure import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
)
from atscore.contexts.targeting.results import KeywordMatchResult, ScoreBreakdown
from atscore.contexts.targeting.scorer import AtsScorer
from atscore.contexts.targeting.suggestions import generate_suggestions
from atscore.utils.config import get_config

LONG_TEXT = " ".join(["word"] * 250)


def make_resume(**overrides) -> ParsedResume:
    """A complete résumé; pass overrides to knock out parts."""
    fields = dict(
        contact=ContactInfo(name="Jane Doe", email="jane@example.com", phone="555-123-4567"),
        experience=[ExperienceEntry(title="Backend Engineer", bullets=["Built APIs in Python"])],
        education=[EducationEntry(institution="State University", degree="B.S.")],
        skills=["Python"],
    )
    fields.update(overrides)
    return ParsedResume(**fields)


def make_match(matched=(), missing=(), confidence=0) -> KeywordMatchResult:
    return KeywordMatchResult(
        matched=list(matched),
        missing=list(missing),
        matched_skills=list(matched),
        missing_skills=list(missing),
        confidence=confidence,
    )


@pytest.fixture(scope="module")
def scorer():
    return AtsScorer()


@pytest.mark.unit
class TestSubScores:
    """Test each sub-score in isolation."""

    def test_keyword_match(self, scorer):
        assert scorer.keyword_match(make_match(confidence=54)) == pytest.approx(0.54)

    def test_experience_relevance_single_job(self, scorer):
        match = make_match(matched=["Python", "Docker"])

        assert scorer.experience_relevance(make_resume(), match) == pytest.approx(0.5)

    def test_experience_relevance_multi_role_bonus(self, scorer):
        resume = make_resume(
            experience=[
                ExperienceEntry(title="Backend Engineer", bullets=["Built APIs in Python"]),
                ExperienceEntry(title="Ops Engineer", bullets=["Shipped Docker images"]),
            ]
        )
        match = make_match(matched=["Python", "Docker"])

        assert scorer.experience_relevance(resume, match) == pytest.approx(0.55)

    def test_experience_relevance_capped(self, scorer):
        resume = make_resume(
            experience=[
                ExperienceEntry(title="Python Engineer"),
                ExperienceEntry(title="Python Developer"),
            ]
        )

        assert scorer.experience_relevance(resume, make_match(matched=["Python"])) == 1.0

    def test_experience_relevance_empty(self, scorer):
        assert scorer.experience_relevance(make_resume(), make_match()) == 0.0
        assert scorer.experience_relevance(make_resume(experience=[]), make_match(matched=["Python"])) == 0.0

    def test_skills_alignment(self, scorer):
        assert scorer.skills_alignment(make_match()) == 0.5
        assert scorer.skills_alignment(make_match(["a", "b", "c"], ["d"])) == pytest.approx(0.75)

    def test_formatting_clean(self, scorer):
        assert scorer.formatting(make_resume(), LONG_TEXT) == pytest.approx(1.0)

    def test_formatting_no_experience(self, scorer):
        assert scorer.formatting(make_resume(experience=[]), LONG_TEXT) == pytest.approx(0.7)

    def test_formatting_length_penalties(self, scorer):
        assert scorer.formatting(make_resume(), "too short") == pytest.approx(0.8)
        assert scorer.formatting(make_resume(), " ".join(["word"] * 1600)) == pytest.approx(0.9)

    def test_formatting_floor(self, scorer):
        assert scorer.formatting(ParsedResume(), "") == 0.0

    def test_completeness(self, scorer):
        assert scorer.completeness(make_resume()) == pytest.approx(1.0)
        assert scorer.completeness(make_resume(experience=[])) == pytest.approx(0.75)
        assert scorer.completeness(ParsedResume()) == 0.0


@pytest.mark.unit
class TestOverallScore:
    """Test the weighted total."""

    def test_bounds(self, scorer):
        assert scorer.score(ScoreBreakdown(1.0, 1.0, 1.0, 1.0, 1.0)) == 100
        assert scorer.score(ScoreBreakdown()) == 0

    def test_weighted(self, scorer):
        assert scorer.score(ScoreBreakdown(0.5, 0.5, 0.5, 0.5, 0.5)) == 50
        assert scorer.score(ScoreBreakdown(keyword_match=1.0)) == 40

    def test_clamped(self):
        scorer = AtsScorer(config={**get_config("scoring"), "weights": {"keyword_match": 2.0}})

        assert scorer.score(ScoreBreakdown(keyword_match=1.0)) == 100

    def test_breakdown_collects_all(self, scorer):
        breakdown = scorer.breakdown(make_resume(), LONG_TEXT, make_match(["Python"], [], 100))

        assert breakdown.keyword_match == 1.0
        assert breakdown.experience_relevance == 1.0
        assert breakdown.skills_alignment == 1.0
        assert scorer.score(breakdown) == 100


@pytest.mark.unit
class TestSuggestions:
    """Test suggestion rules, ordering and truncation."""

    def weak_inputs(self):
        resume = make_resume()
        job = ParsedJobDescription(raw_text="x", keywords=JobKeywords(certifications=["aws certified"]))
        match = make_match(missing=["Kubernetes", "GraphQL"])
        breakdown = ScoreBreakdown(experience_relevance=0.2, formatting=0.6)
        return resume, "Responsible for the API", job, match, breakdown

    def test_all_rules_fire_in_priority_order(self):
        suggestions = generate_suggestions(*self.weak_inputs())

        assert [s.type for s in suggestions] == [
            "keywords",
            "skills",
            "experience",
            "action_verbs",
            "quantification",
            "formatting",
            "certifications",
            "contact",
        ]
        assert [s.priority for s in suggestions][:3] == ["high", "high", "high"]
        assert suggestions[-1].priority == "low"

    def test_messages_name_the_gaps(self):
        suggestions = {s.type: s for s in generate_suggestions(*self.weak_inputs())}

        assert "Kubernetes, GraphQL" in suggestions["keywords"].message
        assert "'responsible for'" in suggestions["action_verbs"].message
        assert "aws certified" in suggestions["certifications"].message

    def test_truncated(self):
        config = copy.deepcopy(get_config("scoring"))
        config["suggestions"]["max_suggestions"] = 3

        suggestions = generate_suggestions(*self.weak_inputs(), config=config)

        assert [s.type for s in suggestions] == ["keywords", "skills", "experience"]

    def test_clean_resume_gets_none(self):
        resume = make_resume(
            contact=ContactInfo(email="jane@example.com", linkedin="linkedin.com/in/jane"),
            certifications=["AWS Certified Solutions Architect"],
        )
        job = ParsedJobDescription(raw_text="x")
        breakdown = ScoreBreakdown(experience_relevance=1.0, formatting=1.0)

        suggestions = generate_suggestions(
            resume, "Led a team, cutting costs by 20%", job, make_match(["Python"]), breakdown
        )

        assert suggestions == []
