"""
Progress API Router

Endpoints for the learning progress dashboard.

Endpoints:
- GET /api/progress/config - Get the aggregation constants in effect
- POST /api/progress/aggregate - Aggregate caller-supplied raw records
- GET /api/progress/{session_id} - Get the dashboard for a learner session
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from progress_dashboard.dependencies import get_aggregation_config, get_progress_service
from progress_dashboard.enums.progress import PeriodType
from progress_dashboard.middleware.error_handling import handle_endpoint_errors
from progress_dashboard.models.base import ErrorDetail
from progress_dashboard.models.progress import AggregateRequest, ProgressDashboard
from progress_dashboard.services.progress import AggregationConfig, ProgressService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("/config", response_model=dict)
async def get_config(
    config: AggregationConfig = Depends(get_aggregation_config),
) -> dict:
    """
    Get the aggregation constants.

    Lets the frontend label its axes with the catalog sizes the
    percentages are measured against.
    """
    return {
        "info_denominator": config.info_denominator,
        "term_denominator": config.term_denominator,
        "rolling_window": config.rolling_window,
        "week_days": config.week_days,
        "month_days": config.month_days,
    }


@router.post("/aggregate", response_model=ProgressDashboard)
@handle_endpoint_errors("Aggregate progress records")
async def aggregate_records(
    request: AggregateRequest,
    service: ProgressService = Depends(get_progress_service),
) -> ProgressDashboard:
    """
    Aggregate raw per-day records supplied in the request body.

    Duplicated days are merged (field-wise maximum), missing days are
    zero-filled, and records with an invalid date are skipped.
    """
    return service.aggregate(request)


@router.get(
    "/{session_id}",
    response_model=ProgressDashboard,
    responses={404: {"model": ErrorDetail}, 502: {"model": ErrorDetail}},
)
@handle_endpoint_errors("Get progress dashboard")
async def get_progress_dashboard(
    session_id: str,
    period: PeriodType = Query(PeriodType.WEEK, description="week, month or custom"),
    start_date: Optional[date] = Query(None, description="Custom period start"),
    end_date: Optional[date] = Query(None, description="Custom period end"),
    service: ProgressService = Depends(get_progress_service),
) -> ProgressDashboard:
    """
    Get the progress dashboard for a learner session.

    Returns:
    - Daily percentage series for info reads, terms and quizzes
    - Trailing-window averages
    - Today's snapshot cards
    """
    return await service.get_dashboard(
        session_id,
        period=period,
        custom_start=start_date,
        custom_end=end_date,
    )
