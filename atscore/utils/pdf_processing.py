"""
PDF processing utilities shared by the rendering context and the CLI.

Helper functions:
    open_pdf: Open PDF bytes (or a path) with pdfplumber.
    extract_pdf_text: Plain text of every page, pages joined by newlines.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

import io
from pathlib import Path
from typing import Callable, List, Union

import pdfplumber

PdfSource = Union[bytes, str, Path]


def open_pdf(source: PdfSource):
    """Open a PDF from raw bytes or a filesystem path."""
    if isinstance(source, (bytes, bytearray)):
        return pdfplumber.open(io.BytesIO(source))
    return pdfplumber.open(str(source))


def extract_pdf_text(source: PdfSource) -> str:
    """Extract the text layer of every page, one page after another."""
    with open_pdf(source) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def cluster_by_y_tolerance(
    items: List,
    tolerance: float = 2.0,
    key: Callable = lambda item: item["top"],
) -> List[List]:
    """
    Group positioned items into lines by Y-coordinate proximity.

    Items are sorted by key; an item joins the current line when its Y lies
    within tolerance of the line's first item. Handles the small baseline
    shifts between bold and regular runs that would otherwise split a line.

    Args:
        items: Characters, words or any positioned records
        tolerance: Max Y distance (points) to the line's anchor item
        key: Returns the Y coordinate of an item

    Returns:
        Lines in ascending key order, each a list of items in input order
    """
    if not items:
        return []

    sorted_items = sorted(items, key=key)

    lines = []
    current_line = [sorted_items[0]]
    current_y = key(sorted_items[0])

    for item in sorted_items[1:]:
        if abs(key(item) - current_y) <= tolerance:
            current_line.append(item)
        else:
            lines.append(current_line)
            current_line = [item]
            current_y = key(item)

    lines.append(current_line)
    return lines
