"""
Strict Base Models for API Request/Response Validation

Base classes with strict validation settings that harden the contract
between the backend, the remote stats source and the dashboard frontend.

Usage:
    # Bodies posted by the dashboard frontend
    class AggregateRequest(StrictRequest):
        start_date: date
        end_date: date

    # For payloads received from upstream or sent to the frontend
    class PeriodStats(StrictResponse):
        start_date: date

Architecture:
    API Request -> StrictRequest (extra="forbid") -> Route Handler
    Stats source -> StrictResponse (extra="ignore") -> Aggregation engine
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """
    Base for request bodies.

    An undeclared field (say ``window`` instead of a query parameter) is
    answered with 422 instead of being silently dropped.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )


class StrictResponse(BaseModel):
    """
    Base model for response bodies and upstream payloads.

    More lenient than StrictRequest: the stats source may add fields we do
    not model, and those are silently ignored.
    """

    model_config = ConfigDict(
        extra="ignore",  # Stats source may add fields
        validate_default=True,
        populate_by_name=True,  # Accept field names as well as wire aliases
    )


class ErrorDetail(StrictResponse):
    """Error body produced by middleware/error_handling.py."""

    error: str  # Error code (e.g., "stats_fetch_error")
    message: str
    error_id: str  # Also printed in the server log line
    details: Optional[dict] = None  # DEBUG only
    timestamp: datetime
