"""
Mutation-only improvement of an uploaded résumé file.

The optimized text is compared line by line with the document's own lines;
each changed line that grows by at most max_words_added_per_line words is
rewritten in place. Everything else in the file is left untouched.

    PDF   extract_lines -> build_line_diffs -> patch_document (white-out + redraw)
    DOCX  paragraph text replaced in the first run, other runs cleared
    TXT   lines replaced, original line endings kept
"""

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import fitz
from docx import Document

from atscore.contexts.intake.validator import validate_text
from atscore.contexts.rendering.exceptions import UnsupportedFormatError
from atscore.contexts.rendering.logger import _log_debug, _log_error, log_improve_result
from atscore.contexts.rendering.pdf_editor import LineDiff, extract_lines, patch_document

DEFAULT_MAX_WORDS_ADDED = 3

MIMETYPE_FORMATS = {
    "application/pdf": "PDF",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "text/plain": "TXT",
}
EXTENSION_FORMATS = {".pdf": "PDF", ".docx": "DOCX", ".txt": "TXT"}


@dataclass
class TextLineDiff:
    """A changed line: its index in the document's line sequence and both texts."""

    index: int
    original: str
    improved: str


@dataclass
class LineChange:
    """
    Report of one rewritten line.

    page is 1-based for PDF documents and None for DOCX and TXT, which
    carry no pagination; index is the 0-based position in the line sequence.
    """

    page: Optional[int]
    index: int
    original: str
    improved: str


@dataclass
class ImproveResult:
    new_bytes: bytes
    changes: list[LineChange] = field(default_factory=list)
    format: str = ""

    def to_dict(self) -> dict:
        return {
            "format": self.format,
            "changes": [
                {"page": c.page, "index": c.index, "original": c.original, "improved": c.improved}
                for c in self.changes
            ],
        }


def build_line_diffs(
    original_lines: list[str], improved_lines: list[str], max_words_added: int = DEFAULT_MAX_WORDS_ADDED
) -> list[TextLineDiff]:
    """
    Pair lines by index and keep those worth rewriting.

    A pair is skipped when either side is empty, when both are equal, or
    when the improved line has more than max_words_added extra words.
    Lines past the shorter sequence are ignored.

    Example:
        >>> build_line_diffs(["Built APIs using Go."], ["Built APIs using Go, gRPC."], 3)
        [TextLineDiff(index=0, original='Built APIs using Go.', improved='Built APIs using Go, gRPC.')]
    """
    diffs = []
    for index, (original, improved) in enumerate(zip(original_lines, improved_lines)):
        if not original or not improved or original == improved:
            continue
        if len(improved.split()) - len(original.split()) > max_words_added:
            continue
        diffs.append(TextLineDiff(index=index, original=original, improved=improved))
    return diffs


def detect_format(filename: Optional[str] = None, mimetype: Optional[str] = None) -> str:
    """
    Resolve 'PDF', 'DOCX' or 'TXT' from the MIME type, then the file extension.

    Raises:
        UnsupportedFormatError: If neither identifies a supported format
    """
    if mimetype:
        base_type = mimetype.split(";")[0].strip().lower()
        if base_type in MIMETYPE_FORMATS:
            return MIMETYPE_FORMATS[base_type]
    if filename:
        suffix = Path(filename).suffix.lower()
        if suffix in EXTENSION_FORMATS:
            return EXTENSION_FORMATS[suffix]
    _log_error(f"Unsupported document format: filename={filename!r}, mimetype={mimetype!r}")
    raise UnsupportedFormatError(filename=filename, mimetype=mimetype)


# =============================================================================
# PER-FORMAT EDITORS
# =============================================================================


def improve_pdf(
    file_bytes: bytes, improved_lines: list[str], max_words_added: int, allow_shrink_font: bool
) -> tuple[bytes, list[LineChange]]:
    pages = extract_lines(file_bytes)
    located = [(page_index, line) for page_index, lines in enumerate(pages) for line in lines]

    # PDF text lines are never blank, so blank lines of the optimized text are not paired
    improved = [line for line in improved_lines if line.strip()]
    diffs = build_line_diffs([line.text for _, line in located], improved, max_words_added)

    line_diffs = [
        LineDiff(page=located[d.index][0], line=located[d.index][1], original=d.original, improved=d.improved)
        for d in diffs
    ]

    with fitz.open(stream=file_bytes, filetype="pdf") as doc:
        applied = patch_document(doc, line_diffs, allow_shrink_font)
        new_bytes = doc.tobytes()

    changes = [
        LineChange(page=line_diff.page + 1, index=diff.index, original=diff.original, improved=diff.improved)
        for line_diff, diff in zip(line_diffs, diffs)
        if any(line_diff is done for done in applied)
    ]
    return new_bytes, changes


def improve_docx(file_bytes: bytes, improved_lines: list[str], max_words_added: int) -> tuple[bytes, list[LineChange]]:
    document = Document(io.BytesIO(file_bytes))
    paragraphs = document.paragraphs
    diffs = build_line_diffs([p.text for p in paragraphs], improved_lines, max_words_added)

    changes = []
    for diff in diffs:
        paragraph = paragraphs[diff.index]
        if not paragraph.runs:
            _log_debug(f"Paragraph {diff.index} has no runs; left unchanged")
            continue
        paragraph.runs[0].text = diff.improved
        for run in paragraph.runs[1:]:
            run.text = ""
        changes.append(LineChange(page=None, index=diff.index, original=diff.original, improved=diff.improved))

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue(), changes


def improve_txt(file_bytes: bytes, improved_lines: list[str], max_words_added: int) -> tuple[bytes, list[LineChange]]:
    raw_lines = file_bytes.decode("utf-8").splitlines(keepends=True)
    bodies = [line.rstrip("\r\n") for line in raw_lines]
    endings = [line[len(body):] for line, body in zip(raw_lines, bodies)]

    diffs = build_line_diffs(bodies, improved_lines, max_words_added)
    for diff in diffs:
        bodies[diff.index] = diff.improved

    new_text = "".join(body + ending for body, ending in zip(bodies, endings))
    changes = [LineChange(page=None, index=d.index, original=d.original, improved=d.improved) for d in diffs]
    return new_text.encode("utf-8"), changes


# =============================================================================
# ENTRY POINT
# =============================================================================


def improve_in_place(
    file_bytes: bytes,
    optimized_text: str,
    filename: Optional[str] = None,
    mimetype: Optional[str] = None,
    max_words_added_per_line: int = DEFAULT_MAX_WORDS_ADDED,
    allow_shrink_font: bool = True,
) -> ImproveResult:
    """
    Apply optimized text to the original document without changing its layout.

    Args:
        file_bytes: Original document
        optimized_text: Improved résumé text, line-aligned with the document
        filename: Original file name (used for format detection)
        mimetype: Declared MIME type (checked before the file name)
        max_words_added_per_line: Lines growing by more words are left alone
        allow_shrink_font: PDF only; shrink replacement text to fit its line

    Returns:
        ImproveResult with the new document bytes and the rewritten lines

    Raises:
        UnsupportedFormatError: If the file is not PDF, DOCX or TXT
        InvalidInputError: If optimized_text is empty or not a string
    """
    file_format = detect_format(filename, mimetype)
    validate_text(optimized_text, "optimized_text")
    improved_lines = optimized_text.splitlines()

    if file_format == "PDF":
        new_bytes, changes = improve_pdf(file_bytes, improved_lines, max_words_added_per_line, allow_shrink_font)
    elif file_format == "DOCX":
        new_bytes, changes = improve_docx(file_bytes, improved_lines, max_words_added_per_line)
    else:
        new_bytes, changes = improve_txt(file_bytes, improved_lines, max_words_added_per_line)

    result = ImproveResult(new_bytes=new_bytes, changes=changes, format=file_format)
    log_improve_result(result, filename)
    return result
