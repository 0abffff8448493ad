"""
Input sanitization for user-authored recipe and step names.

Names end up in HTML views and in calendar SUMMARY lines, so markup and
control characters are stripped before they are stored.
"""
import re
from typing import Annotated

from pydantic import AfterValidator


def sanitize_text_input(value: str) -> str:
    """
    Remove markup and control characters from a display name.

    Args:
        value: The input string to sanitize.

    Returns:
        The sanitized string, whitespace-collapsed and trimmed.

    Examples:
        >>> sanitize_text_input("Rye <b>Bread</b>")
        'Rye Bread'
        >>> sanitize_text_input("Bake\\r\\nEND:VEVENT")
        'Bake END:VEVENT'
    """
    if not value:
        return value

    # Remove HTML tags
    value = re.sub(r'<[^>]*>', '', value)
    # Remove javascript:, data:, and vbscript: URIs
    value = re.sub(r'(?i)(javascript|data|vbscript):', '', value)
    # Control characters (CR/LF would split calendar lines) become spaces
    value = re.sub(r'[\x00-\x1f\x7f]+', ' ', value)
    value = re.sub(r'\s{2,}', ' ', value)

    return value.strip()


# Annotated type for use in Pydantic models
# Usage: field_name: SanitizedStr = Field(...)
SanitizedStr = Annotated[str, AfterValidator(sanitize_text_input)]
