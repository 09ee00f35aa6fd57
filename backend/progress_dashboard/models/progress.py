"""
Learning Progress API Models (Pydantic)

Schemas for the progress aggregation engine and the dashboard API:
- Raw per-day counters as reported by the remote stats source
- Merged (deduplicated) day records
- Normalized percentage points for the trend chart
- Rolling-window averages and "today" snapshot cards
- The assembled dashboard response

Wire format:
    The stats source reports informational reads as ``ai_info`` and
    vocabulary terms as ``terms``. RawDayRecord accepts those aliases as
    well as the Python field names.

Data flows: Stats source -> PeriodStats -> engine -> ProgressDashboard
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from progress_dashboard.enums.progress import ActivityType, DashboardStatus
from progress_dashboard.models.base import StrictRequest, StrictResponse


# ===========================================
# Raw and Merged Day Records
# ===========================================


class RawDayRecord(StrictResponse):
    """
    One reported observation for a calendar day.

    The stats source may send several records for the same day (overlapping
    queries, restated cumulative snapshots) and may omit days entirely.
    ``date`` is kept as the raw day-key string; a missing or malformed key
    does not fail validation here, the merger drops such records instead so
    one bad record never blanks the whole chart.
    """

    model_config = ConfigDict(frozen=True)

    date: Optional[str] = Field(None, description="Day key, YYYY-MM-DD")
    info_count: int = Field(
        0, ge=0, alias="ai_info", description="Informational items read that day"
    )
    term_count: int = Field(
        0, ge=0, alias="terms", description="Vocabulary terms learned that day"
    )
    quiz_score: float = Field(
        0.0,
        allow_inf_nan=False,
        description="Cumulative quiz score reported by the source (pass-through)",
    )
    quiz_correct: int = Field(0, ge=0, description="Quiz answers correct that day")
    quiz_total: int = Field(0, ge=0, description="Quiz answers attempted that day")

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Optional[str]:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            return value
        # Unusable key: keep the record, let the merger skip it
        return None

    @model_validator(mode="after")
    def _check_quiz_counts(self) -> RawDayRecord:
        if self.quiz_correct > self.quiz_total:
            raise ValueError(
                f"quiz_correct ({self.quiz_correct}) exceeds quiz_total ({self.quiz_total})"
            )
        return self


class MergedDayRecord(BaseModel):
    """
    One record per unique day key.

    Built by folding every RawDayRecord sharing a day key, taking the
    field-wise maximum. Immutable once produced.
    """

    model_config = ConfigDict(frozen=True)

    date: str
    info_count: int = 0
    term_count: int = 0
    quiz_score: float = 0.0
    quiz_correct: int = 0
    quiz_total: int = 0

    @classmethod
    def from_raw(cls, record: RawDayRecord) -> MergedDayRecord:
        """Lift a raw record with a valid day key into a merged record."""
        return cls(
            date=record.date,
            info_count=record.info_count,
            term_count=record.term_count,
            quiz_score=record.quiz_score,
            quiz_correct=record.quiz_correct,
            quiz_total=record.quiz_total,
        )


# ===========================================
# Normalized Series
# ===========================================


class NormalizedDayPoint(BaseModel):
    """
    Single data point of the progress trend chart.

    Percentages are measured against fixed catalog sizes and are NOT
    clamped: values above 100 signal over-completion.
    """

    model_config = ConfigDict(frozen=True)

    date: str
    info_percent: int = 0
    term_percent: int = 0
    quiz_percent: int = 0


class RollingAverages(BaseModel):
    """
    Trailing-window means of the three percentage series.

    ``points`` is the number of entries actually averaged, which is
    smaller than ``window`` for short sequences and 0 for an empty one.
    """

    window: int
    points: int = 0
    info_percent: float = 0.0
    term_percent: float = 0.0
    quiz_percent: float = 0.0


class DateWindow(BaseModel):
    """Inclusive calendar window selected for the dashboard."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @property
    def day_count(self) -> int:
        """Number of days in the window, 0 when start > end."""
        return max((self.end - self.start).days + 1, 0)


# ===========================================
# Stats Source Payloads
# ===========================================


class PeriodStats(StrictResponse):
    """
    Raw period statistics returned by the stats source.

    ``start_date`` / ``end_date`` echo the requested window.
    """

    period_data: list[RawDayRecord] = Field(default_factory=list)
    start_date: date
    end_date: date
    total_days: int = Field(0, ge=0)


class UserStats(StrictResponse):
    """
    Today's counters and running totals for the snapshot cards.

    Mirrors the stats source's user-stats payload; every field defaults to
    zero so a partial payload still renders.
    """

    today_ai_info: int = 0
    total_learned: int = 0
    total_ai_info_available: int = 0
    today_terms: int = 0
    total_terms_learned: int = 0
    total_terms_available: int = 0
    today_quiz_score: float = 0.0
    today_quiz_correct: int = 0
    today_quiz_total: int = 0
    cumulative_quiz_score: float = 0.0


# ===========================================
# Dashboard Response
# ===========================================


class ActivitySnapshot(BaseModel):
    """
    "Today" card for one learning activity.

    ``percent`` comes from the last point of the normalized series. The
    counters come from the stats source's user stats when available,
    otherwise from the merged record for the last day.
    """

    activity: ActivityType
    percent: int = 0
    today: float = Field(0, description="Today's count (quiz: today's score)")
    total: Optional[float] = Field(
        None, description="Running total (quiz: cumulative score)"
    )
    available: Optional[int] = Field(None, description="Catalog size, if known")
    correct: Optional[int] = Field(None, description="Quiz answers correct today")
    attempted: Optional[int] = Field(None, description="Quiz answers attempted today")


class ProgressPeaks(BaseModel):
    """Per-series maximum raw values in the window (floor of 1 for axis scaling)."""

    info_count: int = 1
    term_count: int = 1
    quiz_score: float = 1.0


class ProgressDashboard(BaseModel):
    """
    Assembled progress dashboard.

    Contains the complete normalized series for the trend chart, the
    rolling-window averages, and per-activity snapshot cards.
    """

    status: DashboardStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_days: int = 0
    series: list[NormalizedDayPoint] = Field(default_factory=list)
    rolling: RollingAverages
    today: list[ActivitySnapshot] = Field(default_factory=list)
    peaks: ProgressPeaks = Field(default_factory=ProgressPeaks)


class AggregateRequest(StrictRequest):
    """
    Request to aggregate caller-supplied raw records.

    Note: Uses StrictRequest - unknown top-level fields are rejected with 422.
    Individual records are validated later, one at a time: a record with a
    bad counter is dropped, the same as records from the stats source.
    """

    start_date: date
    end_date: date
    records: list[Any] = Field(
        default_factory=list, description="Raw day records in the stats-source wire format"
    )
