"""
Reusable patterns and constants for résumé field extraction.

This module provides contact, location, date and degree regexes used by
the résumé parser. Each field is extracted independently: patterns are
tried in a fixed order and the first match wins.

Pattern classes follow the convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# GEOGRAPHIC CONSTANTS
# =============================================================================

US_STATES = (
    "Alabama",
    "Alaska",
    "Arizona",
    "Arkansas",
    "California",
    "Colorado",
    "Connecticut",
    "Delaware",
    "Florida",
    "Georgia",
    "Hawaii",
    "Idaho",
    "Illinois",
    "Indiana",
    "Iowa",
    "Kansas",
    "Kentucky",
    "Louisiana",
    "Maine",
    "Maryland",
    "Massachusetts",
    "Michigan",
    "Minnesota",
    "Mississippi",
    "Missouri",
    "Montana",
    "Nebraska",
    "Nevada",
    "New Hampshire",
    "New Jersey",
    "New Mexico",
    "New York",
    "North Carolina",
    "North Dakota",
    "Ohio",
    "Oklahoma",
    "Oregon",
    "Pennsylvania",
    "Rhode Island",
    "South Carolina",
    "South Dakota",
    "Tennessee",
    "Texas",
    "Utah",
    "Vermont",
    "Virginia",
    "Washington",
    "West Virginia",
    "Wisconsin",
    "Wyoming",
)

_US_STATE_PATTERN = "|".join(re.escape(s) for s in US_STATES)


# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for résumé contact fields.

    No cross-validation: a phone-looking number inside an address still
    counts as the phone.
    """

    EMAIL: re.Pattern = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

    # NANP-biased: optional country code, (555) 123-4567 / 555.123.4567 / 555 123 4567
    PHONE: re.Pattern = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

    LINKEDIN: re.Pattern = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)

    # Two to four capitalized words on their own line: "Jane Q Doe" does not match, "Jane Doe" does
    NAME: re.Pattern = re.compile(r"^[A-Z][a-z]+(?:\s[A-Z][a-z]+){1,3}$")


MAX_NAME_LENGTH = 50


# =============================================================================
# LOCATION PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LocationPatterns:
    """
    Regex patterns for extracting a location.

    Supports:
    - City, ST (two-letter state code)
    - City, State Name (full state name)
    """

    # Uses literal space (not \s) to prevent matching across line breaks
    CITY_STATE_ABBREV: re.Pattern = re.compile(r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)*),[ \t]*([A-Z]{2})\b")

    CITY_STATE_FULL: re.Pattern = re.compile(
        rf"\b([A-Z][a-z]+(?: [A-Z][a-z]+)*),[ \t]*({_US_STATE_PATTERN})\b"
    )


LOCATION_PATTERNS = [
    LocationPatterns.CITY_STATE_ABBREV,
    LocationPatterns.CITY_STATE_FULL,
]


# =============================================================================
# DATE PATTERNS
# =============================================================================

_MONTH = r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
_DATE = rf"(?:{_MONTH}\s+)?(?:19|20)\d{{2}}|(?:0?[1-9]|1[0-2])/(?:19|20)\d{{2}}"


@dataclass(frozen=True)
class DatePatterns:
    """Employment and graduation date patterns."""

    # "Jan 2020 - Present", "2018 – 2021", "03/2019 to 06/2022"
    DATE_RANGE: re.Pattern = re.compile(
        rf"({_DATE})\s*(?:-|–|—|to)\s*({_DATE}|present|current|now)", re.IGNORECASE
    )

    SINGLE_DATE: re.Pattern = re.compile(rf"({_DATE})", re.IGNORECASE)

    YEAR: re.Pattern = re.compile(r"\b(?:19|20)\d{2}\b")


# =============================================================================
# DEGREE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DegreePatterns:
    """Degree names and the field-of-study clause that follows them."""

    DEGREE: re.Pattern = re.compile(
        r"\b(?:"
        r"(?:bachelor|master|doctor|associate)(?:['’]?s)?(?:\s+of\s+(?:science|arts|engineering|business administration|fine arts|philosophy|technology|applied science))?"
        r"|ph\.?\s?d\.?|mba|m\.b\.a\.?"
        r"|b\.?\s?sc?\.?|m\.?\s?sc?\.?|b\.?\s?a\.?|m\.?\s?a\.?|b\.?\s?eng\.?|m\.?\s?eng\.?|b\.?\s?tech|m\.?\s?tech"
        r")(?=[\s,|\-–]|$)",
        re.IGNORECASE,
    )

    FIELD: re.Pattern = re.compile(r"\bin\s+([A-Z][A-Za-z&]*(?:\s+(?:and\s+|&\s+)?[A-Z][A-Za-z&]*)*)")

    INSTITUTION_HINT: re.Pattern = re.compile(
        r"\b(?:university|college|institute|school|academy|polytechnic)\b", re.IGNORECASE
    )


# =============================================================================
# HELPERS
# =============================================================================


def first_match(text: str, patterns: list) -> Optional[str]:
    """Return the full text of the first pattern that matches, or None."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None
