"""
Progress Dashboard Enums

Defines enums for period selection, tracked learning activities, and
dashboard readiness.
"""

from enum import Enum


class PeriodType(str, Enum):
    """
    Period presets for the progress trend chart.

    - WEEK: the last 7 days, ending today
    - MONTH: the last 30 days, ending today
    - CUSTOM: caller-supplied start and end dates
    """

    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class ActivityType(str, Enum):
    """
    Learning activities tracked on the dashboard.

    Each activity is normalized into its own percentage series.
    """

    INFO = "info"  # Informational content read
    TERMS = "terms"  # Vocabulary terms learned
    QUIZ = "quiz"  # Quiz answers (correct / total)


class DashboardStatus(str, Enum):
    """
    Readiness of an assembled dashboard.

    The rendering surface shows a loading state for PENDING and a
    "no data for this selection" message for EMPTY.
    """

    PENDING = "pending"  # Stats source has not delivered yet
    EMPTY = "empty"  # Requested window is inverted (start > end)
    READY = "ready"
