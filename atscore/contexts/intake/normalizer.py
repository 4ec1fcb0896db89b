"""
Text normalizer for the Intake context.

Cleans job posting text before section extraction: unicode compatibility
forms, smart punctuation, zero-width characters, Windows line endings and
nested markdown sub-headers (**- Required Skills:** under a parent header).

Keyword-level normalization (lower-casing, punctuation stripping) lives in
atscore.utils.text_processing since every context uses it.
"""

import re
import unicodedata

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    # Dashes
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    # Bullets and misc
    "\u2022": "*",  # bullet
    "\u25aa": "*",  # small square bullet
    "\u25cf": "*",  # black circle
    "\u2026": "...",  # ellipsis
    "\u00b7": "*",  # middle dot
}

# **- Required Skills:** / **• Required Skills:**
SUBSECTION_MARKER = re.compile(r"\*\*\s*[-•*]\s*([^*:]+):\s*\*\*")


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents.
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def flatten_subsection_headers(text: str) -> str:
    """Turn **- Child:** sub-headers into plain **Child:** headers."""
    return SUBSECTION_MARKER.sub(lambda m: f"**{m.group(1).strip()}:**", text)


def preprocess_job_text(text: str) -> str:
    """
    Prepare job posting text for section extraction.

    Args:
        text: Raw posting text

    Returns:
        Text with normalized unicode, '\\n' line endings and flat headers
    """
    text = normalize_unicode(text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return flatten_subsection_headers(text)
