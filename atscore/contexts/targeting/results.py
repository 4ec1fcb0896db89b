"""
Result data structures for the Targeting context.

All results are derived values (never persisted) and expose to_dict()
for JSON serialization at the service boundary.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional

from atscore.contexts.intake.job_data_structure import ParsedJobDescription
from atscore.contexts.intake.resume_data_structure import ParsedResume

KEYWORD_CATEGORIES = ("technical", "soft", "tools", "certifications", "phrases")
MATCH_TYPES = ("exact", "synonym", "partial", "fuzzy")


@dataclass
class KeywordSet:
    """Canonical keywords found in a text, per category, priority-ordered."""

    technical: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)

    def all(self) -> list[str]:
        """All categories concatenated, duplicates across categories removed."""
        return list(dict.fromkeys(kw for name in KEYWORD_CATEGORIES for kw in getattr(self, name)))

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(getattr(self, name)) for name in KEYWORD_CATEGORIES}

    def total(self) -> int:
        return sum(len(getattr(self, name)) for name in KEYWORD_CATEGORIES)


@dataclass
class MatchDetail:
    job_keyword: str
    resume_match: str
    match_type: str
    confidence: int


@dataclass
class KeywordMatchResult:
    """
    Outcome of matching job keywords against résumé keywords.

    matched_skills/missing_skills mirror matched/missing: both are computed
    over the same combined vocabulary.
    """

    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    confidence: int = 0
    details: list[MatchDetail] = field(default_factory=list)

    def detail_for(self, job_keyword: str) -> Optional[MatchDetail]:
        for detail in self.details:
            if detail.job_keyword == job_keyword:
                return detail
        return None


@dataclass
class ScoreBreakdown:
    """Five sub-scores, each in [0, 1]."""

    keyword_match: float = 0.0
    experience_relevance: float = 0.0
    skills_alignment: float = 0.0
    formatting: float = 0.0
    completeness: float = 0.0


@dataclass
class Suggestion:
    type: str
    priority: str
    message: str
    impact: str


@dataclass
class AnalysisResult:
    ats_score: int
    matched_keywords: list[str]
    missing_keywords: list[str]
    matched_skills: list[str]
    missing_skills: list[str]
    suggestions: list[Suggestion]
    breakdown: ScoreBreakdown
    resume_data: ParsedResume
    job_data: ParsedJobDescription

    def to_dict(self) -> dict:
        data = asdict(self)
        data["resume_data"] = self.resume_data.to_dict()
        data["job_data"] = self.job_data.to_dict()
        return data


@dataclass
class VersionImprovements:
    ats_score_improvement: int
    keyword_match_improvement: int
    new_keywords_added: list[str]
    keywords_removed: list[str]


@dataclass
class VersionComparison:
    original: AnalysisResult
    optimized: AnalysisResult
    improvements: VersionImprovements

    def to_dict(self) -> dict:
        return {
            "original": self.original.to_dict(),
            "optimized": self.optimized.to_dict(),
            "improvements": asdict(self.improvements),
        }
