"""
Date utilities for parsing timestamps, periods and date ranges.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

# Non-ISO layouts seen in dashboard exports (locale-formatted timestamps)
_FALLBACK_FORMATS = (
    "%m/%d/%Y, %I:%M:%S %p",
    "%d/%m/%Y, %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%d-%m-%Y",
)

# Dashboard date-range preset names
_PERIOD_ALIASES = {
    "week": "last_7_days",
    "month": "last_30_days",
    "quarter": "last_90_days",
    "last_quarter": "last_90_days",
    "year": "last_365_days",
}


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a transaction timestamp.

    Accepts ISO 8601 (including a trailing ``Z``) and a few locale layouts.
    Timezone-aware values are converted to UTC and returned naive so that all
    parsed timestamps compare with each other.

    Returns:
        The parsed datetime, or None if the value cannot be parsed
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_period(period: str) -> Tuple[str, str]:
    """
    Parse a period string into (start_date, end_date).

    Supported periods:
    - "today"
    - "this_month", "last_month"
    - "this_year", "last_year"
    - "last_7_days", "last_30_days", "last_90_days", "last_365_days"
    - "ytd" (year to date)
    - dashboard presets "week", "month", "quarter", "year"

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If period is not recognized
    """
    today = datetime.now()
    period = _PERIOD_ALIASES.get(period, period)

    if period == "today":
        day = today.strftime("%Y-%m-%d")
        return day, day

    elif period == "this_month":
        return get_month_range(today.year, today.month)

    elif period == "last_month":
        first_day_this_month = today.replace(day=1)
        last_day_last_month = first_day_this_month - timedelta(days=1)
        return get_month_range(last_day_last_month.year, last_day_last_month.month)

    elif period == "this_year":
        return f"{today.year}-01-01", f"{today.year}-12-31"

    elif period == "last_year":
        year = today.year - 1
        return f"{year}-01-01", f"{year}-12-31"

    elif period.startswith("last_") and period.endswith("_days"):
        days = period[len("last_"):-len("_days")]
        if days in ("7", "30", "90", "365"):
            start = today - timedelta(days=int(days))
            return start.strftime("%Y-%m-%d"), today.strftime("%Y-%m-%d")
        raise ValueError(f"Unknown period: {period}")

    elif period == "ytd":
        return f"{today.year}-01-01", today.strftime("%Y-%m-%d")

    else:
        raise ValueError(f"Unknown period: {period}")


def get_month_range(year: int, month: int) -> Tuple[str, str]:
    """
    Get the date range for a specific month.

    Args:
        year: Year (e.g., 2026)
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"
