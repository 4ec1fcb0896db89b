"""Custom exceptions for the intake context."""

from typing import Any, Optional


class InvalidInputError(ValueError):
    """
    Raised when résumé or job posting text is missing, empty or not a string.

    Never retried; always surfaced to the caller.

    Attributes:
        message: Error description
        field_name: Which input was rejected (e.g., 'resume_text')
        value_snippet: Short repr of the rejected value
    """

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None):
        self.message = message
        self.field_name = field_name
        self.value_snippet = None

        parts = [message]

        if field_name:
            parts.append(f"Field: {field_name}")

        if value is not None:
            snippet = repr(value)
            self.value_snippet = snippet[:80] + "..." if len(snippet) > 80 else snippet
            parts.append(f"Got: {self.value_snippet} ({type(value).__name__})")

        super().__init__("\n".join(parts))
