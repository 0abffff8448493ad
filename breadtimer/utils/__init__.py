"""
Utility modules.
"""
from breadtimer.utils.sanitization import sanitize_text_input, SanitizedStr

__all__ = ["sanitize_text_input", "SanitizedStr"]
