"""
ResumeAnalyzer: the targeting pipeline end to end.

    resume text ──> parse_resume ─────────────┐
                                              ├─> AtsScorer ─> suggestions ─> AnalysisResult
    job text ─────> JobDescriptionParser ─────┤
          └───────> KeywordMatcher ───────────┘
"""

from typing import Optional

from atscore.contexts.intake.job_parser import JobDescriptionParser
from atscore.contexts.intake.resume_parser import parse_resume
from atscore.contexts.intake.validator import validate_text
from atscore.contexts.targeting.keyword_matcher import KeywordMatcher
from atscore.contexts.targeting.logger import _log_info, log_analysis_result
from atscore.contexts.targeting.results import (
    KEYWORD_CATEGORIES,
    AnalysisResult,
    KeywordSet,
    VersionComparison,
    VersionImprovements,
)
from atscore.contexts.targeting.scorer import AtsScorer
from atscore.contexts.targeting.suggestions import generate_suggestions
from atscore.utils.text_processing import round_half_up


class ResumeAnalyzer:
    """
    Scores résumés against job postings.

    Collaborators are injected so a service can share one matcher and one
    job cache across calls; all default to fresh instances.

    Args:
        matcher: KeywordMatcher (compiled keyword tables)
        scorer: AtsScorer
        job_parser: JobDescriptionParser, usually wrapping a ResultCache
    """

    def __init__(
        self,
        matcher: Optional[KeywordMatcher] = None,
        scorer: Optional[AtsScorer] = None,
        job_parser: Optional[JobDescriptionParser] = None,
    ):
        self.matcher = matcher or KeywordMatcher()
        self.scorer = scorer or AtsScorer()
        self.job_parser = job_parser or JobDescriptionParser()

    def analyze(self, resume_text: str, job_text: str) -> AnalysisResult:
        """
        Score a résumé against a job posting.

        Args:
            resume_text: Raw résumé text
            job_text: Raw job posting text

        Returns:
            AnalysisResult with ats_score in [0, 100]

        Raises:
            InvalidInputError: If either text is missing, empty or not a string
        """
        validate_text(resume_text, "resume_text")
        validate_text(job_text, "job_description")

        resume = parse_resume(resume_text)
        job = self.job_parser.parse(job_text)
        match = self.matcher.match_keywords(resume_text, job_text)

        breakdown = self.scorer.breakdown(resume, resume_text, match)
        suggestions = generate_suggestions(
            resume, resume_text, job, match, breakdown, config=self.scorer.config
        )

        result = AnalysisResult(
            ats_score=self.scorer.score(breakdown),
            matched_keywords=match.matched,
            missing_keywords=match.missing,
            matched_skills=match.matched_skills,
            missing_skills=match.missing_skills,
            suggestions=suggestions,
            breakdown=breakdown,
            resume_data=resume,
            job_data=job,
        )
        log_analysis_result(result)
        return result

    def extract_keywords(self, job_text: str) -> dict:
        """
        Canonical keywords of a job posting, truncated per category.

        Returns:
            {'technical': [...], 'soft': [...], 'tools': [...],
             'certifications': [...], 'phrases': [...], 'total_keywords': int}
        """
        validate_text(job_text, "job_description")

        limits = self.scorer.config["keyword_limits"]
        keywords = self.matcher.extract_keywords(job_text)
        truncated = KeywordSet(
            **{name: getattr(keywords, name)[: limits[name]] for name in KEYWORD_CATEGORIES}
        )

        extracted = truncated.as_dict()
        extracted["total_keywords"] = truncated.total()
        return extracted

    def compare_versions(self, original_text: str, optimized_text: str, job_text: str) -> VersionComparison:
        """
        Analyze two versions of a résumé against the same posting.

        Keyword differences are set differences of matched keywords,
        kept in priority order.
        """
        original = self.analyze(original_text, job_text)
        optimized = self.analyze(optimized_text, job_text)

        before = set(original.matched_keywords)
        after = set(optimized.matched_keywords)

        improvements = VersionImprovements(
            ats_score_improvement=optimized.ats_score - original.ats_score,
            keyword_match_improvement=(
                round_half_up(optimized.breakdown.keyword_match * 100)
                - round_half_up(original.breakdown.keyword_match * 100)
            ),
            new_keywords_added=[kw for kw in optimized.matched_keywords if kw not in before],
            keywords_removed=[kw for kw in original.matched_keywords if kw not in after],
        )
        _log_info(
            f"Version comparison: score {original.ats_score} -> {optimized.ats_score} "
            f"({improvements.ats_score_improvement:+d}), "
            f"{len(improvements.new_keywords_added)} keywords added"
        )
        return VersionComparison(original=original, optimized=optimized, improvements=improvements)
