"""
Input sanitization for user-supplied record fields.

Section names are rendered on every admin page and echoed back in JSON, so
all markup is stripped before they reach the database.
"""

import html

import bleach
import logging
from school_admin.security_logger import SecurityLogger

logger = logging.getLogger(__name__)


class InputSanitizer:
    """
    Strips ALL HTML tags from user-provided text using bleach.
    """

    # Allowed tags (NONE - we strip all HTML)
    ALLOWED_TAGS = []

    # Allowed attributes (NONE)
    ALLOWED_ATTRIBUTES = {}

    # Upper bound on strip / unescape rounds for nested entity encoding
    MAX_PASSES = 5

    @staticmethod
    def _strip_markup(text: str) -> str:
        """One bleach pass, returned as plain (unescaped) text."""
        return html.unescape(bleach.clean(
            text,
            tags=InputSanitizer.ALLOWED_TAGS,
            attributes=InputSanitizer.ALLOWED_ATTRIBUTES,
            strip=True
        ))

    @staticmethod
    def sanitize_string(value: str, field_name: str = 'unknown') -> str:
        """
        Sanitize a single string value.

        Strips ALL HTML tags and attributes. Whitespace at both ends is removed.

        Args:
            value: Raw user input
            field_name: Name of the form field, used for logging

        Returns:
            str: Sanitized string
        """
        if not isinstance(value, str):
            return value

        # bleach returns escaped text; unescaping can expose entity-encoded
        # tags, so strip again until the plain text is stable
        cleaned = value
        for _pass in range(InputSanitizer.MAX_PASSES):
            stripped = InputSanitizer._strip_markup(cleaned)
            if stripped == cleaned:
                break
            cleaned = stripped
        else:
            logger.warning(f"[SANITIZER] Markup in {field_name} did not settle, value dropped")
            cleaned = ''
        cleaned = cleaned.strip()

        if cleaned != html.unescape(value).strip():
            SecurityLogger.log_xss_attempt(value, field_name)

        if '<script' in cleaned.lower() or 'javascript:' in cleaned.lower():
            logger.warning(f"[SANITIZER] Potential XSS detected and blocked in {field_name}: {value[:100]}")
            cleaned = ''

        return cleaned


def sanitize_text(value, field_name='unknown'):
    """Convenience wrapper around InputSanitizer.sanitize_string."""
    return InputSanitizer.sanitize_string(value, field_name)
