"""
Dashboard Assembly

Combines an aggregation pass with the stats source's user counters into
the payload consumed by the rendering surface: trend series, rolling
averages, "today" cards and axis peaks.

A stats fetch that has not resolved yet is passed in as ``None`` and yields
a PENDING dashboard with an empty series, never an error.
"""

from datetime import date
from typing import Mapping, Optional

from progress_dashboard.enums.progress import ActivityType, DashboardStatus
from progress_dashboard.models.progress import (
    ActivitySnapshot,
    MergedDayRecord,
    PeriodStats,
    ProgressDashboard,
    ProgressPeaks,
    RollingAverages,
    UserStats,
)
from progress_dashboard.services.progress.engine import (
    AggregationConfig,
    AggregationResult,
    aggregate_progress,
)


def compute_peaks(merged: Mapping[str, MergedDayRecord]) -> ProgressPeaks:
    """
    Find the largest raw value of each series, with a floor of 1.

    The floor keeps chart axes non-degenerate when a window has no activity.
    """
    records = list(merged.values())
    return ProgressPeaks(
        info_count=max([r.info_count for r in records] + [1]),
        term_count=max([r.term_count for r in records] + [1]),
        quiz_score=max([r.quiz_score for r in records] + [1.0]),
    )


def build_snapshots(
    result: AggregationResult,
    user_stats: Optional[UserStats] = None,
) -> list[ActivitySnapshot]:
    """
    Build one "today" card per activity.

    Percentages come from the last point of the series. Counters come from
    user_stats when the stats source supplied them, otherwise from the
    merged record backing the last point.

    Args:
        result: Aggregation pass for the selected window.
        user_stats: Today's counters and totals from the stats source.

    Returns:
        list[ActivitySnapshot]: Cards for info, terms and quiz, in that order.
    """
    last = result.last_point
    if last is None:
        return []

    record = result.merged.get(last.date) or MergedDayRecord(date=last.date)
    config = result.config

    if user_stats is not None:
        info = ActivitySnapshot(
            activity=ActivityType.INFO,
            percent=last.info_percent,
            today=user_stats.today_ai_info,
            total=user_stats.total_learned,
            available=user_stats.total_ai_info_available or config.info_denominator,
        )
        terms = ActivitySnapshot(
            activity=ActivityType.TERMS,
            percent=last.term_percent,
            today=user_stats.today_terms,
            total=user_stats.total_terms_learned,
            available=user_stats.total_terms_available or config.term_denominator,
        )
        quiz = ActivitySnapshot(
            activity=ActivityType.QUIZ,
            percent=last.quiz_percent,
            today=user_stats.today_quiz_score,
            total=user_stats.cumulative_quiz_score,
            correct=user_stats.today_quiz_correct,
            attempted=user_stats.today_quiz_total,
        )
        return [info, terms, quiz]

    return [
        ActivitySnapshot(
            activity=ActivityType.INFO,
            percent=last.info_percent,
            today=record.info_count,
            available=config.info_denominator,
        ),
        ActivitySnapshot(
            activity=ActivityType.TERMS,
            percent=last.term_percent,
            today=record.term_count,
            available=config.term_denominator,
        ),
        ActivitySnapshot(
            activity=ActivityType.QUIZ,
            percent=last.quiz_percent,
            today=record.quiz_score,
            correct=record.quiz_correct,
            attempted=record.quiz_total,
        ),
    ]


def pending_dashboard(config: AggregationConfig) -> ProgressDashboard:
    """Dashboard for a stats fetch that has not delivered yet."""
    return ProgressDashboard(
        status=DashboardStatus.PENDING,
        rolling=RollingAverages(window=config.rolling_window),
    )


def dashboard_from_result(
    result: AggregationResult,
    start_date: date,
    end_date: date,
    user_stats: Optional[UserStats] = None,
) -> ProgressDashboard:
    """Wrap an aggregation pass as a dashboard payload."""
    status = DashboardStatus.EMPTY if result.is_empty_window else DashboardStatus.READY
    return ProgressDashboard(
        status=status,
        start_date=start_date,
        end_date=end_date,
        total_days=len(result.series),
        series=result.series,
        rolling=result.rolling,
        today=build_snapshots(result, user_stats),
        peaks=compute_peaks(result.merged),
    )


def build_dashboard(
    period_stats: Optional[PeriodStats],
    config: AggregationConfig,
    user_stats: Optional[UserStats] = None,
) -> ProgressDashboard:
    """
    Assemble the dashboard for a period stats payload.

    The window is taken from the payload's echoed start/end dates, so the
    series always spans what the stats source says it answered for.

    Args:
        period_stats: Stats source payload, or None while still pending.
        config: Engine constants.
        user_stats: Optional counters for the "today" cards.

    Returns:
        ProgressDashboard: PENDING, EMPTY (inverted window) or READY.
    """
    if period_stats is None:
        return pending_dashboard(config)

    result = aggregate_progress(
        period_stats.period_data,
        period_stats.start_date,
        period_stats.end_date,
        config,
    )
    return dashboard_from_result(
        result, period_stats.start_date, period_stats.end_date, user_stats
    )
