"""
Pattern matching for résumé and job posting section identification.

This module provides header regexes used to split free text into named
sections, plus the keyword buckets used for job metadata.

Pattern classes follow the convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# RÉSUMÉ SECTION HEADERS
# =============================================================================

# Optional qualifier words allowed in front of a résumé header
# ("Professional Experience", "Relevant Work History", "Technical Skills")
_QUALIFIER = r"(?:(?:professional|relevant|work|technical|core|key|academic|additional)\s+)*"

# Inline content after the header, e.g. "Skills: Python, Go"
_INLINE_TAIL = r"\s*(?:[:\-–|]\s*(?P<inline>.*))?$"


@dataclass(frozen=True)
class ResumeSectionPatterns:
    """
    Header regexes for résumé sections.

    A line is a header only when the whole (stripped) line is the header
    name, optionally qualified and optionally followed by inline content
    after a colon. Lines that merely mention "experience" in a sentence
    are not headers.
    """

    SUMMARY: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:summary|profile|objective|about me|career objective){_INLINE_TAIL}",
        re.IGNORECASE,
    )
    EXPERIENCE: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:experience|work history|employment(?: history)?){_INLINE_TAIL}",
        re.IGNORECASE,
    )
    EDUCATION: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:education|academic background|academics){_INLINE_TAIL}",
        re.IGNORECASE,
    )
    SKILLS: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:skills|competencies|technologies|skills & tools|skills and tools){_INLINE_TAIL}",
        re.IGNORECASE,
    )
    CERTIFICATIONS: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:certifications?|licenses?|licenses & certifications|certifications & licenses){_INLINE_TAIL}",
        re.IGNORECASE,
    )

    # Known headers that only bound other sections
    OTHER: re.Pattern = re.compile(
        rf"^{_QUALIFIER}(?:projects|awards|honors|publications|languages|interests|volunteer(?:ing)?(?: experience)?|references|activities){_INLINE_TAIL}",
        re.IGNORECASE,
    )


# Priority order for header detection
RESUME_SECTION_ORDER = (
    ("summary", ResumeSectionPatterns.SUMMARY),
    ("experience", ResumeSectionPatterns.EXPERIENCE),
    ("education", ResumeSectionPatterns.EDUCATION),
    ("skills", ResumeSectionPatterns.SKILLS),
    ("certifications", ResumeSectionPatterns.CERTIFICATIONS),
    ("other", ResumeSectionPatterns.OTHER),
)

# Headers are short; longer lines are content even if they start like a header
MAX_HEADER_LENGTH = 40


def match_resume_header(line: str) -> Optional[tuple[str, str]]:
    """
    Identify a résumé section header line.

    Args:
        line: A single stripped line of résumé text

    Returns:
        (section_name, inline_content) if the line is a header, else None.
        inline_content is "" when nothing follows the header.

    Example:
        >>> match_resume_header("TECHNICAL SKILLS: Python, Go")
        ('skills', 'Python, Go')
        >>> match_resume_header("5 years of experience building APIs") is None
        True
    """
    stripped = line.strip().strip("#*_ ").strip()
    if not stripped:
        return None

    for name, pattern in RESUME_SECTION_ORDER:
        match = pattern.match(stripped)
        if not match:
            continue
        inline = (match.group("inline") or "").strip()
        header_part = stripped[: match.start("inline")] if match.group("inline") else stripped
        if len(header_part) > MAX_HEADER_LENGTH:
            continue
        return name, inline

    return None


# =============================================================================
# JOB POSTING SECTION HEADERS
# =============================================================================


@dataclass(frozen=True)
class JobSectionPatterns:
    """
    Header regexes for job posting sections.

    Matched against the start of each stripped line, case-insensitively.
    Only lines shorter than MAX_JOB_HEADER_LENGTH are considered, so a
    sentence that happens to start with "Role" or "Plus" stays content.
    """

    RESPONSIBILITIES: re.Pattern = re.compile(
        r"^(?:responsibilities|duties|what you('ll| will) do|role|job description|key responsibilities)",
        re.IGNORECASE,
    )
    REQUIREMENTS: re.Pattern = re.compile(
        r"^(?:requirements|required|must have|what we('re| are) looking for|minimum qualifications)",
        re.IGNORECASE,
    )
    QUALIFICATIONS: re.Pattern = re.compile(
        r"^(?:qualifications|preferred|nice to have|bonus|plus|ideal candidate|desired)",
        re.IGNORECASE,
    )
    BENEFITS: re.Pattern = re.compile(
        r"^(?:benefits|perks|what we offer|compensation|why join|why work)", re.IGNORECASE
    )
    ABOUT: re.Pattern = re.compile(
        r"^(?:about|who we are|company|our mission|our team)", re.IGNORECASE
    )


JOB_SECTION_ORDER = (
    ("responsibilities", JobSectionPatterns.RESPONSIBILITIES),
    ("requirements", JobSectionPatterns.REQUIREMENTS),
    ("qualifications", JobSectionPatterns.QUALIFICATIONS),
    ("benefits", JobSectionPatterns.BENEFITS),
    ("about", JobSectionPatterns.ABOUT),
)

MAX_JOB_HEADER_LENGTH = 60

# "- Required: ..." is a list item, "**Required:**" is a header
_LIST_ITEM = re.compile(r"^\s*(?:[•\-\*▪◦●]|\d+[.)])\s")

# Markdown decoration around headers: "## Requirements", "**Benefits:**"
_MARKDOWN_DECORATION = re.compile(r"^[#*_\s]+|[*_\s]+$")


def match_job_header(line: str) -> Optional[str]:
    """
    Identify a job posting section header line.

    Args:
        line: A single stripped line of job posting text

    Returns:
        Section name ('responsibilities', 'requirements', ...) or None
    """
    if _LIST_ITEM.match(line):
        return None

    stripped = _MARKDOWN_DECORATION.sub("", line)
    if not stripped or len(stripped) > MAX_JOB_HEADER_LENGTH:
        return None

    for name, pattern in JOB_SECTION_ORDER:
        if pattern.match(stripped):
            return name

    return None


# =============================================================================
# REQUIREMENT FLAGS (fallback classification)
# =============================================================================


@dataclass(frozen=True)
class RequirementFlagPatterns:
    """Lines that switch the fallback requirement classifier between required and preferred."""

    REQUIRED: re.Pattern = re.compile(r"^(?:required|must have|minimum)", re.IGNORECASE)
    PREFERRED: re.Pattern = re.compile(r"^(?:preferred|nice to have|bonus|plus)", re.IGNORECASE)


# =============================================================================
# JOB METADATA BUCKETS
# =============================================================================

# (label, pattern) pairs; first matching bucket wins per field
SENIORITY_BUCKETS = (
    ("Senior", re.compile(r"(?<!\w)(?:senior|sr\.|lead|principal|staff)(?!\w)", re.IGNORECASE)),
    ("Mid-Level", re.compile(r"(?<!\w)(?:mid-level|intermediate|mid level)(?!\w)", re.IGNORECASE)),
    (
        "Junior",
        re.compile(r"(?<!\w)(?:junior|jr\.|entry|entry-level|entry level)(?!\w)", re.IGNORECASE),
    ),
    ("Intern", re.compile(r"(?<!\w)(?:intern|internship)(?!\w)", re.IGNORECASE)),
)

EDUCATION_BUCKETS = (
    ("PhD", re.compile(r"(?<!\w)(?:phd|ph\.d|doctorate)(?!\w)", re.IGNORECASE)),
    ("Masters", re.compile(r"(?<!\w)(?:master|masters|ms|m\.s|mba|m\.b\.a)(?!\w)", re.IGNORECASE)),
    (
        "Bachelors",
        re.compile(r"(?<!\w)(?:bachelor|bachelors|bs|b\.s|ba|b\.a|degree)(?!\w)", re.IGNORECASE),
    ),
)

EMPLOYMENT_BUCKETS = (
    ("Full-Time", re.compile(r"(?<!\w)(?:full-time|full time|fulltime)(?!\w)", re.IGNORECASE)),
    ("Part-Time", re.compile(r"(?<!\w)(?:part-time|part time|parttime)(?!\w)", re.IGNORECASE)),
    ("Contract", re.compile(r"(?<!\w)(?:contract|contractor)(?!\w)", re.IGNORECASE)),
    ("Internship", re.compile(r"(?<!\w)(?:intern|internship)(?!\w)", re.IGNORECASE)),
)

YEARS_REQUIRED = re.compile(r"(\d+)\+?\s*years?(?!\w)", re.IGNORECASE)


def match_bucket(text: str, buckets: tuple) -> Optional[str]:
    """Return the label of the first bucket whose pattern occurs in text."""
    for label, pattern in buckets:
        if pattern.search(text):
            return label
    return None
