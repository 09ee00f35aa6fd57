"""
Calendar Day Keys

Generates the ordered, gap-free list of ``YYYY-MM-DD`` day keys between two
inclusive boundary dates, and validates individual day keys.

Days are stepped with ``datetime.date`` arithmetic, never elapsed seconds,
so daylight-saving transitions and timezone offsets can neither skip nor
repeat a day.

Usage:
    from progress_dashboard.services.progress.date_range import generate_date_range

    generate_date_range("2024-06-01", "2024-06-03")
    # ["2024-06-01", "2024-06-02", "2024-06-03"]
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

DAY_KEY_FORMAT = "%Y-%m-%d"

DateLike = Union[date, str]


def parse_day_key(value: Any) -> Optional[date]:
    """
    Parse a canonical ``YYYY-MM-DD`` day key.

    Only the zero-padded canonical form is accepted because day keys are
    matched by exact string equality: "2024-6-1" would never line up with
    the generated "2024-06-01".

    Args:
        value: Candidate day key.

    Returns:
        The parsed date, or None if the value is missing or malformed.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.strptime(value, DAY_KEY_FORMAT).date()
    except ValueError:
        return None
    if parsed.isoformat() != value:
        return None
    return parsed


def is_day_key(value: Any) -> bool:
    """Return True if value is a canonical day key."""
    return parse_day_key(value) is not None


def to_date(value: DateLike) -> date:
    """
    Coerce a boundary date given as a date or a day-key string.

    Raises:
        ValueError: If a string boundary is not a canonical day key.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_day_key(value)
    if parsed is None:
        raise ValueError(f"Invalid day key {value!r}, expected YYYY-MM-DD")
    return parsed


def generate_date_range(start: DateLike, end: DateLike) -> list[str]:
    """
    List every calendar day from start to end, inclusive.

    An inverted window (start > end) yields an empty list rather than an
    error; callers surface it as "no data for this selection".

    Args:
        start: First day of the window.
        end: Last day of the window.

    Returns:
        Ascending day keys with no gaps and no duplicates.
    """
    start_day = to_date(start)
    end_day = to_date(end)

    if start_day > end_day:
        return []

    span = (end_day - start_day).days
    return [(start_day + timedelta(days=offset)).isoformat() for offset in range(span + 1)]
