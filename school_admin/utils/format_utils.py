"""
Locale-aware formatting for peso amounts and record dates.

This module handles:
- Peso amounts (en_PH grouping, 2 decimals, missing amounts shown as zero)
- Dates as en-US locale strings (M/D/YYYY), with a fixed fallback for
  missing or malformed values
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency as babel_format_currency

logger = logging.getLogger(__name__)

CURRENCY_CODE = 'PHP'
CURRENCY_LOCALE = 'en_PH'
DATE_LOCALE = 'en_US'
DATE_PATTERN = 'M/d/yyyy'

# Rendered in place of a missing or unparseable date
DATE_FALLBACK = '—'


def _to_decimal(value):
    # Money objects (djmoney / py-moneyed) carry the number in .amount
    amount = getattr(value, 'amount', value)
    if amount is None or amount == '':
        return Decimal('0')
    try:
        return Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        logger.debug(f"Unparseable amount {amount!r}, formatting as zero")
        return Decimal('0')


def format_currency(value, currency=CURRENCY_CODE, locale=CURRENCY_LOCALE):
    """
    Formats an amount as pesos: 1000 -> "₱1,000.00", None -> "₱0.00".
    """
    return babel_format_currency(_to_decimal(value), currency, locale=locale)


def parse_date(value):
    """Returns a date for date/datetime/ISO-string input, or None when that is not possible."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def format_date(value, locale=DATE_LOCALE):
    """
    Formats a date as a locale date string ("3/15/2024").
    Missing or malformed dates render DATE_FALLBACK.
    """
    parsed = parse_date(value)
    if parsed is None:
        return DATE_FALLBACK
    return babel_format_date(parsed, DATE_PATTERN, locale=locale)
