"""
Centralized enum definitions for the application.

Usage:
    from progress_dashboard.enums import PeriodType, ActivityType
"""

from progress_dashboard.enums.progress import (
    ActivityType,
    DashboardStatus,
    PeriodType,
)

__all__ = [
    "ActivityType",
    "DashboardStatus",
    "PeriodType",
]
