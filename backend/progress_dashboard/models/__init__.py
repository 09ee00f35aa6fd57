"""Pydantic models for the application."""

from progress_dashboard.models.progress import (
    ActivitySnapshot,
    AggregateRequest,
    DateWindow,
    MergedDayRecord,
    NormalizedDayPoint,
    PeriodStats,
    ProgressDashboard,
    ProgressPeaks,
    RawDayRecord,
    RollingAverages,
    UserStats,
)

__all__ = [
    "ActivitySnapshot",
    "AggregateRequest",
    "DateWindow",
    "MergedDayRecord",
    "NormalizedDayPoint",
    "PeriodStats",
    "ProgressDashboard",
    "ProgressPeaks",
    "RawDayRecord",
    "RollingAverages",
    "UserStats",
]
