"""
Custom exceptions for the rendering context.

Provides clear error messages for documents the in-place editor cannot handle.
"""

from typing import Optional

SUPPORTED_FORMATS = ("PDF", "DOCX", "TXT")


class UnsupportedFormatError(ValueError):
    """
    Raised when a file is not a PDF, DOCX or TXT document.

    Attributes:
        filename: Name of the offending file, if known
        mimetype: Declared MIME type, if known
    """

    def __init__(self, filename: Optional[str] = None, mimetype: Optional[str] = None):
        self.filename = filename
        self.mimetype = mimetype

        message_parts = [f"Unsupported file type. Supported formats: {', '.join(SUPPORTED_FORMATS)}"]
        if filename:
            message_parts.append(f"File: {filename}")
        if mimetype:
            message_parts.append(f"MIME type: {mimetype}")

        super().__init__("\n".join(message_parts))
