"""Input validation shared by the parsers and the service entry points."""

from atscore.contexts.intake.exceptions import InvalidInputError


def validate_text(value, field_name: str) -> str:
    """
    Ensure a text input is a non-empty string.

    Args:
        value: Candidate input
        field_name: Name reported in the error (e.g., 'job_description')

    Returns:
        The value unchanged

    Raises:
        InvalidInputError: If value is not a str or is empty/whitespace-only
    """
    if not isinstance(value, str):
        raise InvalidInputError(f"{field_name} must be text", field_name, value)
    if not value.strip():
        raise InvalidInputError(f"{field_name} is empty", field_name, value)
    return value
