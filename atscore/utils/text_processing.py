"""
Text normalization and string similarity helpers.

Used by every context: the parsers for bullet handling, the matcher for
keyword canonicalization and fuzzy comparison, the scorer for word counts.
"""

import math
import re

from rapidfuzz.distance import Levenshtein

# Characters kept by normalize_text besides word chars and whitespace.
# '.', '+', '#', '/', '-' carry meaning in tech terms (node.js, c++, c#, ci/cd).
_EXTRACTION_NOISE = re.compile(r"[^\w\s.\-/+#]")
_KEYWORD_NOISE = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

# Leading bullet markers: •, -, *, ▪, ◦, –, "1." / "1)" / "a." / "a)"
BULLET_PREFIX = re.compile(r"^\s*(?:[•\-\*▪◦●–]|\d+[.)]|[A-Za-z][.)](?=\s))\s*")


def normalize_text(text: str) -> str:
    """
    Normalize text for keyword extraction.

    Lower-cases, replaces punctuation noise (anything but word characters,
    whitespace and . - / + #) with spaces, collapses whitespace and trims.
    Idempotent.
    """
    text = _EXTRACTION_NOISE.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def normalize_keyword(keyword: str) -> str:
    """
    Normalize a keyword for comparison.

    Lower-cases, turns all punctuation into spaces, collapses whitespace and trims.
    """
    keyword = _KEYWORD_NOISE.sub(" ", keyword.lower())
    return _WHITESPACE.sub(" ", keyword).strip()


def whole_word(fragment: str) -> str:
    """
    Wrap a regex fragment so it only matches as a whole word.

    Uses lookarounds instead of \\b so fragments that start or end with
    punctuation (c\\+\\+, c#, \\.net) still match before whitespace.
    """
    return rf"(?<!\w)(?:{fragment})(?!\w)"


def is_bullet(line: str) -> bool:
    """True if the line starts with a bullet or list marker."""
    return bool(BULLET_PREFIX.match(line))


def strip_bullet(line: str) -> str:
    """Remove a leading bullet marker and surrounding whitespace."""
    return BULLET_PREFIX.sub("", line, count=1).strip()


def word_count(text: str) -> int:
    return len(text.split())


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute all cost 1)."""
    return Levenshtein.distance(a, b)


def calculate_similarity(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity in [0, 1].

    similarity = (max_len - distance) / max_len. Two empty strings are
    identical (1.0); exactly one empty string scores 0.0. Symmetric.

    Example:
        >>> calculate_similarity("kubernetes", "kubernetes")
        1.0
        >>> calculate_similarity("react", "reactjs")
        0.7142857142857143
    """
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    if min(len(a), len(b)) == 0:
        return 0.0

    return (longer - levenshtein_distance(a, b)) / longer
