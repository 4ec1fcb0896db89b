"""
Job description parsing utilities for the Intake context.

Provides pure functions that turn raw posting text into a
ParsedJobDescription, plus JobDescriptionParser, which memoizes results
by content hash in an injected cache.

Vocabularies live in config/job_vocabulary.yaml; section headers and
metadata buckets live in section_patterns.py.
"""

import hashlib
import re
from functools import lru_cache
from typing import Optional

from atscore.contexts.intake.job_data_structure import (
    KEYWORD_CATEGORIES,
    JobKeywords,
    JobMetadata,
    JobRequirements,
    JobSections,
    ParsedJobDescription,
)
from atscore.contexts.intake.logger import log_job_parsed
from atscore.contexts.intake.normalizer import preprocess_job_text
from atscore.contexts.intake.section_patterns import (
    EDUCATION_BUCKETS,
    EMPLOYMENT_BUCKETS,
    SENIORITY_BUCKETS,
    YEARS_REQUIRED,
    RequirementFlagPatterns,
    match_bucket,
    match_job_header,
)
from atscore.contexts.intake.validator import validate_text
from atscore.utils.config import get_config
from atscore.utils.text_processing import is_bullet, strip_bullet, whole_word

CACHE_KEY_PREFIX = "job_"
CACHE_TTL_SECONDS = 60 * 60

# Requirement items shorter than this are dropped ("Python", "- 3+")
MIN_REQUIREMENT_LENGTH = 10


# =============================================================================
# SECTIONS
# =============================================================================


def identify_sections(text: str) -> JobSections:
    """
    Split posting text into named sections.

    Scans line by line; a header line switches the current section and
    flushes the previous buffer. Content before any header goes to 'other'.
    Inline content after a header colon ("Requirements: 5+ years") is kept.

    Args:
        text: Posting text (unicode-normalized)

    Returns:
        JobSections with raw text per section
    """
    buffers: dict[str, list[str]] = {}
    current = "other"

    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue

        header = match_job_header(stripped)
        if header:
            current = header
            buffers.setdefault(current, [])
            if ":" in stripped:
                inline = stripped.split(":", 1)[1].strip(" *_")
                if inline:
                    buffers[current].append(inline)
            continue

        buffers.setdefault(current, []).append(stripped)

    return JobSections(**{name: "\n".join(lines).strip() for name, lines in buffers.items()})


# =============================================================================
# KEYWORDS
# =============================================================================


@lru_cache(maxsize=1)
def _compiled_vocabulary() -> dict[str, list[re.Pattern]]:
    vocabulary = get_config("job_vocabulary")
    return {
        category: [re.compile(whole_word(term), re.IGNORECASE) for term in vocabulary.get(category, [])]
        for category in KEYWORD_CATEGORIES
    }


def extract_keywords(text: str) -> JobKeywords:
    """
    Run the fixed vocabularies over the whole text.

    Each term is matched as a whole word, case-insensitively; the reported
    keyword is the matched text lower-cased, deduplicated in vocabulary order.

    Example:
        >>> extract_keywords("Requires Python, AWS, Docker.").technical
        ['python', 'aws', 'docker']
    """
    keywords = JobKeywords()

    for category, patterns in _compiled_vocabulary().items():
        found: list[str] = []
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                term = match.group(0).lower()
                if term not in found:
                    found.append(term)
        setattr(keywords, category, found)

    return keywords


# =============================================================================
# REQUIREMENTS
# =============================================================================


def _bullet_items(section_text: str) -> list[str]:
    items = []
    for line in section_text.split("\n"):
        stripped = line.strip()
        if is_bullet(stripped):
            cleaned = strip_bullet(stripped)
            if len(cleaned) > MIN_REQUIREMENT_LENGTH:
                items.append(cleaned)
    return items


def classify_requirements(text: str, sections: JobSections) -> JobRequirements:
    """
    Collect required and preferred requirement bullets.

    Bullets from the requirements section are required, bullets from the
    qualifications section are preferred. When neither yields anything, the
    whole text is scanned: "required/must have/minimum" lines and
    "preferred/nice to have/bonus/plus" lines set a flag that classifies the
    bullets after them; bullets seen before any flag count as required.
    """
    requirements = JobRequirements(
        required=_bullet_items(sections.requirements),
        preferred=_bullet_items(sections.qualifications),
    )
    if requirements.required or requirements.preferred:
        return requirements

    in_preferred = False
    for line in text.split("\n"):
        stripped = line.strip().lstrip("#*_ ")
        if RequirementFlagPatterns.REQUIRED.match(stripped):
            in_preferred = False
        elif RequirementFlagPatterns.PREFERRED.match(stripped):
            in_preferred = True

        stripped = line.strip()
        if not is_bullet(stripped):
            continue
        cleaned = strip_bullet(stripped)
        if len(cleaned) <= MIN_REQUIREMENT_LENGTH:
            continue

        if in_preferred:
            requirements.preferred.append(cleaned)
        else:
            requirements.required.append(cleaned)

    return requirements


# =============================================================================
# METADATA
# =============================================================================


def extract_metadata(text: str) -> JobMetadata:
    """
    Extract seniority, years of experience, degree level and employment type.

    Each field is independent; within a field the first matching bucket wins.
    """
    years = YEARS_REQUIRED.search(text)
    return JobMetadata(
        experience_level=match_bucket(text, SENIORITY_BUCKETS),
        years_required=int(years.group(1)) if years else 0,
        education_level=match_bucket(text, EDUCATION_BUCKETS),
        employment_type=match_bucket(text, EMPLOYMENT_BUCKETS),
    )


# =============================================================================
# ENTRY POINTS
# =============================================================================


def parse_job_text(text: str) -> ParsedJobDescription:
    """
    Parse job posting text into a ParsedJobDescription.

    Pure: the result depends only on the text.

    Args:
        text: Raw job posting text

    Returns:
        ParsedJobDescription

    Raises:
        InvalidInputError: If text is empty or not a string
    """
    validate_text(text, "job_description")

    normalized = preprocess_job_text(text)
    sections = identify_sections(normalized)

    parsed = ParsedJobDescription(
        raw_text=text,
        sections=sections,
        keywords=extract_keywords(normalized),
        requirements=classify_requirements(normalized, sections),
        metadata=extract_metadata(normalized),
    )

    if not any(getattr(sections, name) for name in ("responsibilities", "requirements", "qualifications")):
        parsed.warnings.append("No responsibilities/requirements/qualifications headers found")

    return parsed


def job_cache_key(text: str) -> str:
    """Cache key for a posting: 'job_' + MD5 hex digest of the raw text."""
    return CACHE_KEY_PREFIX + hashlib.md5(text.encode("utf-8")).hexdigest()


class JobDescriptionParser:
    """
    Memoizing front-end for parse_job_text().

    Args:
        cache: Object with get(key) and set(key, value, ttl); None disables caching
        ttl: Lifetime of a cached result in seconds

    Example:
        >>> parser = JobDescriptionParser(cache=ResultCache())
        >>> first = parser.parse(posting)
        >>> parser.parse(posting) is first
        True
    """

    def __init__(self, cache=None, ttl: float = CACHE_TTL_SECONDS):
        self.cache = cache
        self.ttl = ttl

    def parse(self, text: str) -> ParsedJobDescription:
        validate_text(text, "job_description")

        key: Optional[str] = None
        if self.cache is not None:
            key = job_cache_key(text)
            cached = self.cache.get(key)
            if cached is not None:
                log_job_parsed(cached, cached=True)
                return cached

        parsed = parse_job_text(text)
        log_job_parsed(parsed)

        if key is not None:
            self.cache.set(key, parsed, self.ttl)

        return parsed
