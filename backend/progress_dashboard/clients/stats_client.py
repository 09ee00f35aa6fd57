"""
Stats Source Client

Async HTTP client for the remote learning-stats source.

Features:
- Period stats (raw per-day counters) for an inclusive date window
- User stats (today's counters and running totals)
- Retries with exponential backoff on transport errors and 5xx/429
- Per-record validation: a malformed record is dropped, not the payload

Endpoints used (relative to STATS_API_BASE_URL):
- GET /api/user-progress/{session_id}/period-stats?start_date=&end_date=
- GET /api/user-progress/{session_id}/stats

Usage:
    from progress_dashboard.clients import StatsClient

    async with StatsClient() as client:
        stats = await client.get_period_stats("abc", date(2024, 6, 1), date(2024, 6, 7))
"""

import logging
from datetime import date
from typing import Any, Optional

import httpx
import pydantic
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from progress_dashboard.config import settings
from progress_dashboard.middleware.error_handling import NotFoundError, StatsFetchError
from progress_dashboard.models.progress import PeriodStats, RawDayRecord, UserStats

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def _is_retryable(exc: BaseException) -> bool:
    """Retry transport failures and transient HTTP statuses only."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def parse_period_stats(payload: Any) -> PeriodStats:
    """
    Validate a period-stats payload, dropping records that fail validation.

    Records with a missing or malformed date are kept here; the merger
    skips them. Records whose counters are not numbers are dropped with a
    warning so one bad row never fails the whole window.

    Raises:
        StatsFetchError: If the envelope itself (dates, shape) is invalid.
    """
    if not isinstance(payload, dict):
        raise StatsFetchError(
            f"Period stats payload must be an object, got {type(payload).__name__}"
        )

    raw_records = payload.get("period_data") or []
    if not isinstance(raw_records, list):
        raise StatsFetchError("'period_data' must be a list")

    records: list[RawDayRecord] = []
    for idx, entry in enumerate(raw_records):
        try:
            records.append(RawDayRecord.model_validate(entry))
        except pydantic.ValidationError as e:
            logger.warning(f"Dropping invalid period record {idx}: {e.error_count()} error(s)")

    try:
        return PeriodStats.model_validate({**payload, "period_data": records})
    except pydantic.ValidationError as e:
        raise StatsFetchError(
            "Stats source returned an invalid period payload",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


class StatsClient:
    """
    Client for the remote learning-stats source.

    The client owns an httpx.AsyncClient; close it with ``aclose()`` or use
    the client as an async context manager.
    """

    PERIOD_STATS_PATH = "/api/user-progress/{session_id}/period-stats"
    USER_STATS_PATH = "/api/user-progress/{session_id}/stats"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the stats client.

        Args:
            base_url: Stats source root URL (default: STATS_API_BASE_URL)
            timeout: HTTP timeout in seconds (default: STATS_API_TIMEOUT)
            max_retries: Total attempts per request (default: STATS_API_MAX_RETRIES)
            retry_backoff: Exponential backoff multiplier in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url: str = base_url or settings.STATS_API_BASE_URL
        self.timeout: float = timeout if timeout is not None else settings.STATS_API_TIMEOUT
        self.max_retries: int = max_retries or settings.STATS_API_MAX_RETRIES
        self.retry_backoff: float = retry_backoff
        self.client: httpx.AsyncClient = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "StatsClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """
        GET a JSON document with retries.

        Raises:
            NotFoundError: If the stats source answers 404.
            StatsFetchError: On any other failure once retries are spent.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_backoff, max=self.retry_backoff * 8),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self.client.get(path, params=params)
                    response.raise_for_status()
                    return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code == 404:
                raise NotFoundError(f"No stats found at {path}") from e
            raise StatsFetchError(
                f"Stats source returned HTTP {status_code}",
                details={"path": path, "status_code": status_code},
            ) from e
        except httpx.HTTPError as e:
            raise StatsFetchError(
                f"Stats source unreachable: {type(e).__name__}",
                details={"path": path},
            ) from e
        except ValueError as e:
            # Body was not valid JSON
            raise StatsFetchError(
                "Stats source returned a non-JSON body", details={"path": path}
            ) from e

    async def get_period_stats(
        self, session_id: str, start_date: date, end_date: date
    ) -> PeriodStats:
        """
        Fetch raw per-day counters for an inclusive window.

        Args:
            session_id: Learner session identifier.
            start_date: First day of the window.
            end_date: Last day of the window.

        Returns:
            PeriodStats with the raw records and the echoed window.
        """
        payload = await self._get_json(
            self.PERIOD_STATS_PATH.format(session_id=session_id),
            params={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
            },
        )
        stats = parse_period_stats(payload)
        logger.debug(
            f"Fetched {len(stats.period_data)} record(s) for {session_id} "
            f"({stats.start_date}..{stats.end_date})"
        )
        return stats

    async def get_user_stats(self, session_id: str) -> UserStats:
        """
        Fetch today's counters and running totals.

        Args:
            session_id: Learner session identifier.

        Returns:
            UserStats for the snapshot cards.
        """
        payload = await self._get_json(self.USER_STATS_PATH.format(session_id=session_id))
        try:
            return UserStats.model_validate(payload)
        except pydantic.ValidationError as e:
            raise StatsFetchError(
                "Stats source returned an invalid user stats payload",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
