"""
Résumé parsing utilities for the Intake context.

Splits free-form résumé text into contact, summary, experience, education,
skills and certifications. Parsing is best-effort: anything not recognized
is left as an empty default instead of raising.

Pattern follows the job parser: pure functions over text, with the
dataclasses in resume_data_structure.py as the only output type.
"""

import re
from typing import Optional

from atscore.contexts.intake.extraction_patterns import (
    LOCATION_PATTERNS,
    MAX_NAME_LENGTH,
    ContactPatterns,
    DatePatterns,
    DegreePatterns,
    first_match,
)
from atscore.contexts.intake.logger import log_resume_parsed
from atscore.contexts.intake.resume_data_structure import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
)
from atscore.contexts.intake.section_patterns import match_resume_header
from atscore.contexts.intake.validator import validate_text
from atscore.utils.text_processing import is_bullet, strip_bullet

# Lines before the first recognized header (name and contact block)
PREAMBLE = "preamble"

# Name is looked for among the first few non-empty lines only
NAME_SEARCH_LINES = 5

MIN_HEADER_LENGTH = 5
MAX_HEADER_LENGTH = 100
MIN_BULLET_LENGTH = 10

SKILL_LENGTH_RANGE = (2, 50)
CERTIFICATION_LENGTH_RANGE = (5, 150)

_SEPARATOR_CHARS = " \t|,;-–—:"

# Title/company splits, tried in order
_TITLE_AT_COMPANY = re.compile(r"^(.+?)\s+at\s+(.+)$")
_TITLE_DASH_COMPANY = re.compile(r"^(.+?)\s+[-–—]\s+(.+)$")
_TITLE_PIPE_COMPANY = re.compile(r"^(.+?)\s*\|\s*(.+)$")
_TITLE_COMMA_COMPANY = re.compile(r"^(.+?),\s*(.+)$")
TITLE_COMPANY_PATTERNS = (
    _TITLE_AT_COMPANY,
    _TITLE_DASH_COMPANY,
    _TITLE_PIPE_COMPANY,
    _TITLE_COMMA_COMPANY,
)

_LIST_SPLIT = re.compile(r"\s*[,;•|·]\s*|\s+[-–]\s+|\n")
_CATEGORY_LABEL = re.compile(r"^[A-Za-z][A-Za-z &/]{0,30}:\s*")
_LEADING_CONJUNCTION = re.compile(r"^(?:and|or)\s+", re.IGNORECASE)
_INSTITUTION_SPLIT = re.compile(r"\s*[,|–—]\s*|\s+-\s+")


# =============================================================================
# SECTION SPLITTING
# =============================================================================


def split_sections(text: str) -> dict[str, list[str]]:
    """
    Group résumé lines under the section header that precedes them.

    Header lines themselves are not kept, but inline content after a header
    ("Skills: Python, Go") is. A header seen twice extends the same section.
    Lines before the first header go to 'preamble'.

    Args:
        text: Raw résumé text

    Returns:
        Dict of section name to list of raw lines (in order)
    """
    sections: dict[str, list[str]] = {PREAMBLE: []}
    current = PREAMBLE

    for line in text.splitlines():
        header = match_resume_header(line)
        if header:
            current, inline = header
            sections.setdefault(current, [])
            if inline:
                sections[current].append(inline)
        else:
            sections[current].append(line)

    return sections


def _content_lines(lines: list[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


# =============================================================================
# CONTACT AND SUMMARY
# =============================================================================


def extract_contact(text: str, preamble: list[str]) -> ContactInfo:
    """
    Extract contact fields, each independently; first match wins.

    Name and location are looked for in the preamble first since
    employer addresses further down also look like "City, ST".
    """
    contact = ContactInfo()

    email = ContactPatterns.EMAIL.search(text)
    if email:
        contact.email = email.group(0)

    phone = ContactPatterns.PHONE.search(text)
    if phone:
        contact.phone = phone.group(0).strip()

    linkedin = ContactPatterns.LINKEDIN.search(text)
    if linkedin:
        contact.linkedin = linkedin.group(0)

    head = _content_lines(preamble) or _content_lines(text.splitlines())
    for line in head[:NAME_SEARCH_LINES]:
        if len(line) < MAX_NAME_LENGTH and ContactPatterns.NAME.match(line):
            contact.name = line
            break

    contact.location = first_match("\n".join(head), LOCATION_PATTERNS)
    if contact.location is None:
        contact.location = first_match(text, LOCATION_PATTERNS)

    return contact


def extract_summary(lines: list[str]) -> str:
    """Join the summary section into a single paragraph."""
    return " ".join(_content_lines(lines))


# =============================================================================
# EXPERIENCE
# =============================================================================


def _is_job_header(line: str) -> bool:
    """
    Decide whether a non-bullet experience line starts a new job.

    A header contains a year, or is short. Sentences (ending with '.') and
    wrapped continuations (starting lower-case) are never headers.
    """
    if is_bullet(line) or len(line) <= MIN_HEADER_LENGTH:
        return False
    if line.endswith(".") or line[0].islower():
        return False
    return bool(DatePatterns.YEAR.search(line)) or len(line) < MAX_HEADER_LENGTH


def _clean(text: str) -> str:
    return re.sub(r"\s{2,}", " ", text).strip(_SEPARATOR_CHARS)


def split_title_company(text: str) -> tuple[str, str]:
    """
    Split a header line (dates already removed) into title and company.

    Tries "X at Y", "X - Y", "X | Y", then "X, Y"; with no separator the
    whole line is the title.

    Example:
        >>> split_title_company("Software Engineer at Acme Corp")
        ('Software Engineer', 'Acme Corp')
    """
    text = _clean(text)
    for pattern in TITLE_COMPANY_PATTERNS:
        match = pattern.match(text)
        if match:
            title = _clean(match.group(1))
            company = _clean(re.split(r"\s*\|\s*", match.group(2))[0])
            if title and company:
                return title, company
    return text, ""


def _date_span(line: str) -> tuple[str, str]:
    match = DatePatterns.DATE_RANGE.search(line)
    if match:
        return match.group(1), match.group(2)
    single = DatePatterns.SINGLE_DATE.search(line)
    if single:
        return single.group(1), ""
    return "", ""


def _strip_dates(line: str) -> str:
    line = DatePatterns.DATE_RANGE.sub(" ", line)
    return _clean(DatePatterns.SINGLE_DATE.sub(" ", line))


def _is_continuation(line: Optional[str]) -> bool:
    """A following line that can carry the company or dates of the header above it."""
    return bool(line) and not is_bullet(line) and not line.endswith(".") and len(line) < MAX_HEADER_LENGTH


def parse_job_entry(line: str, next_line: Optional[str] = None) -> tuple[ExperienceEntry, bool]:
    """
    Parse a job header, optionally borrowing company/dates from the next line.

    Args:
        line: Header line
        next_line: Following non-empty line, if any

    Returns:
        (entry, consumed_next): consumed_next is True when next_line was
        used and should not be parsed again
    """
    start_date, end_date = _date_span(line)
    title, company = split_title_company(_strip_dates(line))
    consumed = False

    if (not company or not start_date) and _is_continuation(next_line):
        next_start, next_end = _date_span(next_line)
        remainder = _strip_dates(next_line)
        _, remainder_company = split_title_company(remainder)

        if not company and remainder and not remainder_company:
            company = remainder
            consumed = True
        elif not remainder and next_start:
            consumed = True

        if consumed and not start_date:
            start_date, end_date = next_start, next_end

    return (
        ExperienceEntry(title=title, company=company, start_date=start_date, end_date=end_date),
        consumed,
    )


def parse_experience(lines: list[str]) -> list[ExperienceEntry]:
    """
    Parse the experience section into job entries.

    Header lines start a new entry; bullet-prefixed or long lines after
    a header accumulate as that entry's bullets.
    """
    content = _content_lines(lines)
    entries: list[ExperienceEntry] = []
    current: Optional[ExperienceEntry] = None

    i = 0
    while i < len(content):
        line = content[i]

        if _is_job_header(line):
            next_line = content[i + 1] if i + 1 < len(content) else None
            current, consumed = parse_job_entry(line, next_line)
            entries.append(current)
            i += 2 if consumed else 1
            continue

        if current is not None:
            bullet = strip_bullet(line)
            if len(bullet) > MIN_BULLET_LENGTH:
                current.bullets.append(bullet)
        i += 1

    return entries


# =============================================================================
# EDUCATION
# =============================================================================


def _graduation_date(line: str) -> str:
    match = DatePatterns.DATE_RANGE.search(line)
    if match:
        return match.group(2)
    dates = DatePatterns.SINGLE_DATE.findall(line)
    return dates[-1] if dates else ""


def _pick_institution(text: str) -> str:
    parts = [_clean(p) for p in _INSTITUTION_SPLIT.split(text)]
    parts = [p for p in parts if p]
    for part in parts:
        if DegreePatterns.INSTITUTION_HINT.search(part):
            return part
    return parts[0] if parts else ""


def parse_education_entry(line: str) -> EducationEntry:
    """
    Parse a single education line.

    Example:
        >>> entry = parse_education_entry("B.S. in Computer Science, State University, 2018")
        >>> (entry.degree, entry.field, entry.institution, entry.graduation_date)
        ('B.S.', 'Computer Science', 'State University', '2018')
    """
    graduation_date = _graduation_date(line)
    rest = _strip_dates(line)

    degree = ""
    degree_match = DegreePatterns.DEGREE.search(rest)
    if degree_match:
        degree = degree_match.group(0).strip()
        rest = rest[: degree_match.start()] + " " + rest[degree_match.end() :]

    field = ""
    field_match = DegreePatterns.FIELD.search(rest)
    if field_match:
        field = field_match.group(1).strip()
        rest = rest[: field_match.start()] + " " + rest[field_match.end() :]

    return EducationEntry(
        institution=_pick_institution(rest),
        degree=degree,
        field=field,
        graduation_date=graduation_date,
    )


def parse_education(lines: list[str]) -> list[EducationEntry]:
    """
    Parse the education section.

    A degree line starts an entry (or completes an institution-first entry);
    a following institution or date-only line fills the gaps. Bullets
    (GPA, coursework) are ignored.
    """
    entries: list[EducationEntry] = []
    current: Optional[EducationEntry] = None

    for raw in _content_lines(lines):
        bullet = is_bullet(raw)
        line = strip_bullet(raw)

        if DegreePatterns.DEGREE.search(line):
            parsed = parse_education_entry(line)
            if current is not None and not current.degree:
                current.degree = parsed.degree
                current.field = current.field or parsed.field
                current.graduation_date = current.graduation_date or parsed.graduation_date
                current.institution = current.institution or parsed.institution
            else:
                current = parsed
                entries.append(current)
            continue

        if bullet:
            continue

        remainder = _strip_dates(line)
        date = _graduation_date(line)

        if current is not None and not remainder and date and not current.graduation_date:
            current.graduation_date = date
        elif current is not None and not current.institution and remainder:
            current.institution = _pick_institution(remainder)
            current.graduation_date = current.graduation_date or date
        elif len(line) > MIN_HEADER_LENGTH and remainder:
            current = EducationEntry(institution=_pick_institution(remainder), graduation_date=date)
            entries.append(current)

    return entries


# =============================================================================
# SKILLS AND CERTIFICATIONS
# =============================================================================


def split_list_items(
    lines: list[str],
    length_range: tuple[int, int],
    strip_labels: bool = False,
) -> list[str]:
    """
    Split list-like section lines on commas, bullets, pipes and newlines.

    Tokens are trimmed and kept only when their length is inside
    length_range (inclusive). No deduplication or canonicalization.

    Args:
        lines: Section lines
        length_range: (min, max) token length
        strip_labels: Drop "Category:" prefixes and leading "and"/"or"
    """
    low, high = length_range
    items = []

    for line in _content_lines(lines):
        line = strip_bullet(line)
        if strip_labels:
            line = _CATEGORY_LABEL.sub("", line)

        for token in _LIST_SPLIT.split(line):
            token = strip_bullet(token).strip()
            if strip_labels:
                token = _LEADING_CONJUNCTION.sub("", token)
            if low <= len(token) <= high:
                items.append(token)

    return items


# =============================================================================
# ENTRY POINT
# =============================================================================


def parse_resume(text: str) -> ParsedResume:
    """
    Parse résumé text into a ParsedResume.

    Args:
        text: Raw résumé text

    Returns:
        ParsedResume; absent sections are empty

    Raises:
        InvalidInputError: If text is empty or not a string
    """
    validate_text(text, "resume_text")

    sections = split_sections(text)

    resume = ParsedResume(
        contact=extract_contact(text, sections.get(PREAMBLE, [])),
        summary=extract_summary(sections.get("summary", [])),
        experience=parse_experience(sections.get("experience", [])),
        education=parse_education(sections.get("education", [])),
        skills=split_list_items(sections.get("skills", []), SKILL_LENGTH_RANGE, strip_labels=True),
        certifications=split_list_items(
            sections.get("certifications", []), CERTIFICATION_LENGTH_RANGE
        ),
    )

    for name in ("experience", "education", "skills"):
        if name not in sections:
            resume.warnings.append(f"No {name} section found")

    log_resume_parsed(resume)
    return resume
