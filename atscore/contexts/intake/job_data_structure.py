"""
Job description data structures for the Intake context.

ParsedJobDescription is a pure function of the raw posting text, which is
what makes it safe to memoize by content hash.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional

KEYWORD_CATEGORIES = ("technical", "soft", "tools", "certifications", "phrases")


@dataclass
class JobSections:
    """Raw text per named section; empty string when the section is absent."""

    responsibilities: str = ""
    requirements: str = ""
    qualifications: str = ""
    benefits: str = ""
    about: str = ""
    other: str = ""


@dataclass
class JobKeywords:
    """Deduplicated, ordered keyword lists per category."""

    technical: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(getattr(self, name)) for name in KEYWORD_CATEGORIES}

    def all(self) -> list[str]:
        """All categories concatenated, first occurrence kept."""
        return list(dict.fromkeys(kw for name in KEYWORD_CATEGORIES for kw in getattr(self, name)))


@dataclass
class JobRequirements:
    required: list[str] = field(default_factory=list)
    preferred: list[str] = field(default_factory=list)


@dataclass
class JobMetadata:
    experience_level: Optional[str] = None
    years_required: int = 0
    education_level: Optional[str] = None
    employment_type: Optional[str] = None


@dataclass
class ParsedJobDescription:
    """
    Structured job posting.

    Attributes:
        raw_text: Input text, unmodified
        sections: Raw text of each named section
        keywords: Vocabulary hits per category (lower-cased)
        requirements: Required / preferred bullet items
        metadata: Seniority, years of experience, degree level, employment type
        warnings: Non-fatal parser observations
    """

    raw_text: str
    sections: JobSections = field(default_factory=JobSections)
    keywords: JobKeywords = field(default_factory=JobKeywords)
    requirements: JobRequirements = field(default_factory=JobRequirements)
    metadata: JobMetadata = field(default_factory=JobMetadata)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-serializable form (parser warnings excluded)."""
        data = asdict(self)
        data.pop("warnings")
        return data
