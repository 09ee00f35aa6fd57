"""
Period Window Resolution

Turns a dashboard period selection into an inclusive calendar window.

- WEEK: the last ``week_days`` days ending today (7 by default)
- MONTH: the last ``month_days`` days ending today (30 by default)
- CUSTOM: the caller's bounds; falls back to WEEK unless both are given
"""

from datetime import date, timedelta
from typing import Optional

from progress_dashboard.enums.progress import PeriodType
from progress_dashboard.models.progress import DateWindow


def trailing_window(today: date, days: int) -> DateWindow:
    """Inclusive window of ``days`` days ending on ``today``."""
    return DateWindow(start=today - timedelta(days=days - 1), end=today)


def resolve_period(
    period: PeriodType,
    today: date,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    week_days: int = 7,
    month_days: int = 30,
) -> DateWindow:
    """
    Resolve a period selection to a DateWindow.

    Custom bounds are passed through as given, including an inverted pair;
    the engine turns that into an empty "no data" result.

    Args:
        period: Selected period preset.
        today: Reference day (end of the preset windows).
        custom_start: Start date for CUSTOM.
        custom_end: End date for CUSTOM.
        week_days: Length of the WEEK preset.
        month_days: Length of the MONTH preset.

    Returns:
        DateWindow: The inclusive window to aggregate.
    """
    if period == PeriodType.MONTH:
        return trailing_window(today, month_days)

    if period == PeriodType.CUSTOM and custom_start and custom_end:
        return DateWindow(start=custom_start, end=custom_end)

    return trailing_window(today, week_days)
