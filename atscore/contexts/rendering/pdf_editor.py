"""
In-place PDF line editing.

extract_lines() reads positioned words with pdfplumber and groups them into
lines; apply_changes() redacts each changed line (white fill, old text
removed from the text layer) and draws the replacement text at the same
origin with PyMuPDF.

Coordinates follow PDF convention: origin bottom-left, y grows upward.
A line's y is the lowest point of its words, so lines read top to bottom
in descending y. PyMuPDF draws in top-left coordinates; conversions go
through the page height.

No attempt is made to keep the original font family, weight or colour:
replacement text is set in Helvetica, black.
"""

import math
from dataclasses import dataclass
from typing import Optional

import fitz

from atscore.contexts.rendering.logger import _log_debug, _log_warning, log_patch_skipped
from atscore.utils.pdf_processing import cluster_by_y_tolerance, open_pdf

LINE_Y_TOLERANCE = 2.0
WORD_GAP = 2.0
DEFAULT_LINE_HEIGHT = 10.0

MIN_BASE_FONT_SIZE = 8
MIN_FONT_SIZE = 6
REPLACEMENT_FONT = "helv"

# Redaction box: starts this fraction of the font size below the line,
# and is this multiple of the line height tall
BOX_DESCENT = 0.2
BOX_HEIGHT_FACTOR = 1.2


@dataclass
class LineBox:
    """One rendered text line and its bounding box (PDF coordinates)."""

    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class LineDiff:
    """
    A literal replacement bound to an on-page line.

    Attributes:
        page: 0-based page index
        line: Geometry of the line being replaced
        original: Current text of the line
        improved: Replacement text
    """

    page: int
    line: LineBox
    original: str
    improved: str


# =============================================================================
# EXTRACTION
# =============================================================================


def words_to_line(words: list[dict], page_height: float) -> LineBox:
    """
    Join one cluster of pdfplumber words into a LineBox.

    Words are concatenated left to right; a space is inserted when the gap
    to the previous word's right edge exceeds WORD_GAP.
    """
    words = sorted(words, key=lambda w: w["x0"])

    text = ""
    last_x1: Optional[float] = None
    for word in words:
        if last_x1 is not None and word["x0"] - last_x1 > WORD_GAP:
            text += " "
        text += word["text"]
        last_x1 = word["x1"]

    min_x = min(w["x0"] for w in words)
    max_x = max(w["x1"] for w in words)
    height = max((w["bottom"] - w["top"]) for w in words) or DEFAULT_LINE_HEIGHT

    return LineBox(
        text=text,
        x=min_x,
        y=min(page_height - w["bottom"] for w in words),
        width=max(max_x - min_x, 1.0),
        height=height,
    )


def extract_lines(pdf_bytes: bytes) -> list[list[LineBox]]:
    """
    Extract text lines with positions from every page.

    Args:
        pdf_bytes: PDF document

    Returns:
        One list per page of non-empty LineBoxes, top to bottom (descending y)
    """
    pages = []
    with open_pdf(pdf_bytes) as pdf:
        for page in pdf.pages:
            words = page.extract_words()
            clusters = cluster_by_y_tolerance(
                words, tolerance=LINE_Y_TOLERANCE, key=lambda w: page.height - w["bottom"]
            )
            lines = [words_to_line(cluster, page.height) for cluster in clusters]
            lines = [line for line in lines if line.text.strip()]
            lines.sort(key=lambda line: -line.y)
            pages.append(lines)

    _log_debug(f"Extracted {sum(len(p) for p in pages)} lines from {len(pages)} pages")
    return pages


# =============================================================================
# PATCHING
# =============================================================================


def base_font_size(line_height: float) -> int:
    return max(math.floor(line_height), MIN_BASE_FONT_SIZE)


def fit_font_size(
    base_size: int, text_width: float, max_width: float, allow_shrink: bool = True
) -> Optional[int]:
    """
    Font size for replacement text that must fit a line's width.

    Args:
        base_size: Starting font size
        text_width: Width of the replacement text at base_size
        max_width: Width of the original line
        allow_shrink: Scale down instead of giving up when too wide

    Returns:
        base_size if the text fits, the proportionally reduced size
        (floored, never below MIN_FONT_SIZE) when shrinking is allowed,
        or None when the change must be skipped

    Example:
        >>> fit_font_size(12, text_width=150, max_width=120)
        9
    """
    if text_width <= max_width:
        return base_size
    if not allow_shrink:
        return None
    return max(math.floor(base_size * max_width / text_width), MIN_FONT_SIZE)


def clamp_text(text: str, font_size: float, max_width: float) -> str:
    """Drop trailing characters until the text fits max_width."""
    clamped = text
    while clamped and fitz.get_text_length(clamped, fontname=REPLACEMENT_FONT, fontsize=font_size) > max_width:
        clamped = clamped[:-1]
    if clamped != text:
        _log_warning(f"Replacement text clipped to fit line: '{clamped}'")
    return clamped


@dataclass
class _LinePatch:
    rect: "fitz.Rect"
    origin: "fitz.Point"
    text: str
    font_size: int


def _plan_patch(page: "fitz.Page", change: LineDiff, allow_shrink_font: bool) -> Optional[_LinePatch]:
    line = change.line
    page_height = page.rect.height

    size = base_font_size(line.height)
    text_width = fitz.get_text_length(change.improved, fontname=REPLACEMENT_FONT, fontsize=size)
    fitted = fit_font_size(size, text_width, line.width, allow_shrink_font)
    if fitted is None:
        log_patch_skipped(change.page, change.improved, "too wide and shrinking disabled")
        return None

    box_bottom = line.y - fitted * BOX_DESCENT
    box_top = box_bottom + line.height * BOX_HEIGHT_FACTOR
    return _LinePatch(
        rect=fitz.Rect(line.x, page_height - box_top, line.x + line.width, page_height - box_bottom),
        origin=fitz.Point(line.x, page_height - line.y),
        text=clamp_text(change.improved, fitted, line.width),
        font_size=fitted,
    )


def patch_document(doc: "fitz.Document", changes: list[LineDiff], allow_shrink_font: bool = True) -> list[LineDiff]:
    """
    Apply line replacements to an open PyMuPDF document.

    Each replaced line is redacted (white fill, its text removed from the
    text layer, images kept), then the new text is drawn at the line's origin.
    Redactions are applied once per page, before any text is inserted.

    Returns:
        The changes that were applied, in order
    """
    applied = []
    patches_by_page: dict[int, list[_LinePatch]] = {}
    for change in changes:
        if not 0 <= change.page < doc.page_count:
            log_patch_skipped(change.page, change.improved, "page out of range")
            continue
        patch = _plan_patch(doc[change.page], change, allow_shrink_font)
        if patch is not None:
            patches_by_page.setdefault(change.page, []).append(patch)
            applied.append(change)

    for page_number, patches in patches_by_page.items():
        page = doc[page_number]
        for patch in patches:
            page.add_redact_annot(patch.rect, fill=(1, 1, 1))
        page.apply_redactions(images=fitz.PDF_REDACT_IMAGE_NONE)
        for patch in patches:
            page.insert_text(
                patch.origin, patch.text, fontname=REPLACEMENT_FONT, fontsize=patch.font_size, color=(0, 0, 0)
            )

    return applied


def apply_changes(pdf_bytes: bytes, changes: list[LineDiff], allow_shrink_font: bool = True) -> bytes:
    """
    Rewrite lines of a PDF in place.

    Args:
        pdf_bytes: Original PDF document
        changes: Line replacements; each is skipped when its text can't fit
        allow_shrink_font: Shrink text that is wider than its line (min 6pt)

    Returns:
        The modified PDF document
    """
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        applied = patch_document(doc, changes, allow_shrink_font)
        _log_debug(f"Applied {len(applied)}/{len(changes)} line patches")
        return doc.tobytes()
