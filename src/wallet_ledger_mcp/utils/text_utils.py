"""
Text helpers for phone matching and money formatting.
"""

import re
from decimal import Decimal
from typing import Optional

_PHONE_PUNCTUATION = re.compile(r"[\s\-().]")


def normalize_phone(value: Optional[str], country_code: str = "+91") -> str:
    """
    Normalize a phone number (or a fragment of one) for comparison.

    Removes spaces, dashes, dots and parentheses, then strips a leading
    country-code prefix, so "+91 98765-43220" and "9876543220" compare equal.

    Args:
        value: Phone number or search fragment
        country_code: Prefix to strip, including the leading "+"

    Returns:
        Normalized digits (may be empty)
    """
    if not value:
        return ""
    cleaned = _PHONE_PUNCTUATION.sub("", value)
    if country_code and cleaned.startswith(country_code):
        cleaned = cleaned[len(country_code):]
    return cleaned


def format_money(amount: Decimal, symbol: str = "₹") -> str:
    """Format an amount with two decimals and a currency-symbol prefix."""
    return f"{symbol}{amount:.2f}"
