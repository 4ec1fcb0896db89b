"""
ATS score computation.

The score is a weighted sum of five sub-scores, each in [0, 1]:

    keyword_match         confidence of the keyword match / 100
    experience_relevance  best per-job coverage of matched keywords
    skills_alignment      matched / (matched + missing)
    formatting            1 - structural penalties
    completeness          weighted presence of contact and sections

Weights and penalties live in config/scoring.yaml.
"""

from typing import Optional

from atscore.contexts.intake.resume_data_structure import ParsedResume
from atscore.contexts.targeting.results import KeywordMatchResult, ScoreBreakdown
from atscore.utils.config import get_config
from atscore.utils.text_processing import round_half_up


class AtsScorer:
    """
    Computes the score breakdown and the overall 0-100 score.

    Args:
        config: Parsed scoring config. Defaults to the packaged scoring.yaml.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config if config is not None else get_config("scoring")
        self.weights: dict[str, float] = self.config["weights"]

    # =========================================================================
    # SUB-SCORES
    # =========================================================================

    def keyword_match(self, match: KeywordMatchResult) -> float:
        return match.confidence / 100

    def experience_relevance(self, resume: ParsedResume, match: KeywordMatchResult) -> float:
        """
        Fraction of matched keywords found in the single most relevant job.

        A résumé with two or more jobs gets the multi-role bonus, capped at 1.0.
        """
        if not match.matched or not resume.experience:
            return 0.0

        needles = [kw.lower() for kw in match.matched]
        best = max(
            sum(1 for needle in needles if needle in entry.searchable_text())
            for entry in resume.experience
        )
        relevance = best / len(needles)

        if len(resume.experience) >= 2:
            relevance *= self.config["multi_role_bonus"]

        return min(relevance, 1.0)

    def skills_alignment(self, match: KeywordMatchResult) -> float:
        total = len(match.matched_skills) + len(match.missing_skills)
        if total == 0:
            return self.config["neutral_skills_alignment"]
        return len(match.matched_skills) / total

    def formatting(self, resume: ParsedResume, resume_text: str) -> float:
        """Start from 1.0 and subtract a penalty per structural problem."""
        formatting = self.config["formatting"]
        penalties = formatting["penalties"]
        score = 1.0

        if not resume.experience:
            score -= penalties["no_experience"]
        if not resume.education:
            score -= penalties["no_education"]
        if not resume.skills:
            score -= penalties["no_skills"]
        if not resume.contact.has_reachable_contact():
            score -= penalties["no_contact"]

        words = len(resume_text.split())
        if words < formatting["min_words"]:
            score -= penalties["too_short"]
        elif words > formatting["max_words"]:
            score -= penalties["too_long"]

        return max(0.0, score)

    def completeness(self, resume: ParsedResume) -> float:
        weights = self.config["completeness"]
        present = {
            "name": bool(resume.contact.name),
            "email": bool(resume.contact.email),
            "phone": bool(resume.contact.phone),
            "experience": bool(resume.experience),
            "education": bool(resume.education),
            "skills": bool(resume.skills),
        }
        score = sum(weights[name] for name, found in present.items() if found)
        return min(score, 1.0)

    # =========================================================================
    # AGGREGATE
    # =========================================================================

    def breakdown(self, resume: ParsedResume, resume_text: str, match: KeywordMatchResult) -> ScoreBreakdown:
        return ScoreBreakdown(
            keyword_match=self.keyword_match(match),
            experience_relevance=self.experience_relevance(resume, match),
            skills_alignment=self.skills_alignment(match),
            formatting=self.formatting(resume, resume_text),
            completeness=self.completeness(resume),
        )

    def score(self, breakdown: ScoreBreakdown) -> int:
        """
        Weighted sum scaled to 0-100, clamped and rounded half up.

        Example:
            >>> AtsScorer().score(ScoreBreakdown(1.0, 1.0, 1.0, 1.0, 1.0))
            100
        """
        total = sum(getattr(breakdown, name) * weight for name, weight in self.weights.items())
        return round_half_up(min(100.0, max(0.0, total * 100)))
