"""
Date-related utility functions.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional

from diet_tracker.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"

# "+3", "-1", "+2d"
RELATIVE_RE = re.compile(r"^([+-]\d+)d?$")


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def parse_iso_date(text: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValidationError: If text is not a valid date
    """
    try:
        return datetime.strptime((text or "").strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date: '{text}' (expected YYYY-MM-DD)")


def parse_date(text: str, base: Optional[date] = None) -> date:
    """
    Parse user date input.

    Handles various input formats:
    - "2025-01-15" (ISO date)
    - "today", "yesterday", "tomorrow"
    - "+1", "-3", "-3d" (days relative to base)

    Args:
        text: User input
        base: Reference date for relative input (defaults to today)

    Returns:
        Parsed date

    Raises:
        ValidationError: If input matches no supported format

    Example:
        >>> parse_date("-1", date(2025, 1, 15))
        datetime.date(2025, 1, 14)
    """
    base = base or date.today()
    key = (text or "").strip().lower()

    if key == "today":
        return date.today()
    if key == "yesterday":
        return date.today() - timedelta(days=1)
    if key == "tomorrow":
        return date.today() + timedelta(days=1)

    match = RELATIVE_RE.match(key)
    if match:
        return base + timedelta(days=int(match.group(1)))

    return parse_iso_date(key)
