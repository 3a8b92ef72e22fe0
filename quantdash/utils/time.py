"""
Calendar-date utilities for series generation and report stamping.

Series carry plain ISO dates; only report export needs a full timestamp.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional


def today(reference: Optional[date] = None) -> date:
    """
    Get the current calendar date, preferring an explicit reference.

    Args:
        reference: Optional pinned date (tests, replays)

    Returns:
        The reference date, or the local date today
    """
    if reference is not None:
        return reference

    return date.today()


def format_date(value: date) -> str:
    """Format a calendar date as ``YYYY-MM-DD``."""
    return value.isoformat()


def parse_date(value: str) -> date:
    """
    Parse an ISO ``YYYY-MM-DD`` string into a date.

    Raises:
        ValueError: If the string is not an ISO calendar date
    """
    return date.fromisoformat(value)


def date_sequence(start: date, count: int) -> list[str]:
    """
    Build ``count`` consecutive ISO dates starting at ``start``.

    Args:
        start: First calendar date
        count: Number of dates to produce

    Returns:
        List of ISO date strings, one calendar day apart
    """
    return [format_date(start + timedelta(days=offset)) for offset in range(count)]


def utc_now() -> datetime:
    """Current wall-clock instant in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp for report export.

    Args:
        value: Timestamp to format

    Returns:
        ISO8601 formatted string
    """
    return value.isoformat()
