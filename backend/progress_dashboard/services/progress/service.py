"""
Progress Dashboard Service

Orchestrates period resolution, the stats fetch and the aggregation engine.

Responsibilities:
- Resolve week / month / custom selections to a calendar window
- Fetch period stats and user stats from the stats source
- Assemble the dashboard (series, rolling averages, today cards)

The aggregation itself stays pure; this service is the only place that
awaits I/O.

Usage:
    from progress_dashboard.services.progress import ProgressService

    service = ProgressService(stats_client)
    dashboard = await service.get_dashboard("session-id", PeriodType.MONTH)
"""

import asyncio
import logging
from datetime import date
from typing import Optional

from progress_dashboard.clients.stats_client import StatsClient, parse_period_stats
from progress_dashboard.enums.progress import PeriodType
from progress_dashboard.middleware.error_handling import ServiceError
from progress_dashboard.models.progress import (
    AggregateRequest,
    DateWindow,
    PeriodStats,
    ProgressDashboard,
    UserStats,
)
from progress_dashboard.services.progress.dashboard import build_dashboard
from progress_dashboard.services.progress.engine import AggregationConfig
from progress_dashboard.services.progress.period import resolve_period

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Learning progress dashboard service.

    Holds no per-request state: the selected period and custom bounds are
    arguments to each call.
    """

    def __init__(
        self,
        client: StatsClient,
        config: Optional[AggregationConfig] = None,
    ):
        """
        Initialize the progress service.

        Args:
            client: Stats source client.
            config: Engine constants (default: from settings).
        """
        self.client = client
        self.config = config or AggregationConfig.from_settings()

    def resolve_window(
        self,
        period: PeriodType,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> DateWindow:
        """Resolve a period selection using the configured preset lengths."""
        return resolve_period(
            period,
            today or date.today(),
            custom_start=custom_start,
            custom_end=custom_end,
            week_days=self.config.week_days,
            month_days=self.config.month_days,
        )

    async def get_dashboard(
        self,
        session_id: str,
        period: PeriodType = PeriodType.WEEK,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None,
        today: Optional[date] = None,
    ) -> ProgressDashboard:
        """
        Build the progress dashboard for a learner session.

        An inverted custom window short-circuits to an EMPTY dashboard
        without calling the stats source.

        Args:
            session_id: Learner session identifier.
            period: Period preset.
            custom_start: Start date for PeriodType.CUSTOM.
            custom_end: End date for PeriodType.CUSTOM.
            today: Reference day (default: date.today()).

        Returns:
            ProgressDashboard for the resolved window.

        Raises:
            StatsFetchError: If period stats cannot be fetched.
            NotFoundError: If the stats source does not know the session.
        """
        window = self.resolve_window(period, custom_start, custom_end, today)

        if window.day_count == 0:
            logger.info(f"Empty window {window.start}..{window.end} for {session_id}")
            return build_dashboard(
                PeriodStats(start_date=window.start, end_date=window.end),
                self.config,
            )

        period_stats, user_stats = await asyncio.gather(
            self.client.get_period_stats(session_id, window.start, window.end),
            self._fetch_user_stats(session_id),
        )

        return build_dashboard(period_stats, self.config, user_stats)

    async def _fetch_user_stats(self, session_id: str) -> Optional[UserStats]:
        """
        Fetch user stats, degrading to None on failure.

        The today cards fall back to the last merged record, so a failing
        user-stats endpoint must not take the chart down with it.
        """
        try:
            return await self.client.get_user_stats(session_id)
        except ServiceError as e:
            logger.warning(f"User stats unavailable for {session_id}: {e.message}")
            return None

    def aggregate(self, request: AggregateRequest) -> ProgressDashboard:
        """
        Build a dashboard from caller-supplied raw records (no fetch).

        Records go through the same per-record validation as stats-source
        payloads, so an invalid record is dropped with a warning.

        Args:
            request: Window and raw records.

        Returns:
            ProgressDashboard for the request's window.
        """
        period_stats = parse_period_stats(
            {
                "period_data": request.records,
                "start_date": request.start_date,
                "end_date": request.end_date,
                "total_days": len(request.records),
            }
        )
        return build_dashboard(period_stats, self.config)
