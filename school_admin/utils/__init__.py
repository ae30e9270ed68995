"""
Utility functions for the ACNHS admin portal.

Formatting helpers are re-exported here because both the server-rendered
pages and the screens package use them. Database-backed helpers live in
their own modules (e.g. ``school_admin.utils.archive_utils``) and are
imported from there.
"""

# Formatting utilities
from .format_utils import (
    format_currency,
    format_date,
    parse_date,
    DATE_FALLBACK,
)
