"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests.
"""

import os
import sys
from datetime import date
from pathlib import Path
from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env file from project root BEFORE any fixtures run
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Test values override .env so tests never reach a real stats source. They
# must be in place before progress_dashboard.config builds its settings.
_original_env = os.environ.copy()
TEST_ENV = {
    "STATS_API_BASE_URL": "http://stats.test",
    "STATS_API_MAX_RETRIES": "3",
    "DEBUG": "true",
}
os.environ.update(TEST_ENV)

from progress_dashboard.models.progress import PeriodStats, RawDayRecord, UserStats
from progress_dashboard.services.progress import AggregationConfig


# ============================================================================
# Environment Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Restore the original environment once the session ends."""
    yield

    for key in TEST_ENV:
        if key in _original_env:
            os.environ[key] = _original_env[key]
        else:
            os.environ.pop(key, None)


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def config() -> AggregationConfig:
    """Default engine constants: 3 info items, 60 terms, 7-day window."""
    return AggregationConfig(
        info_denominator=3,
        term_denominator=60,
        rolling_window=7,
        week_days=7,
        month_days=30,
    )


def make_record(day: Any, **counters: Any) -> RawDayRecord:
    """
    Create a RawDayRecord using the stats source's wire names.

    Args:
        day: Day key (or anything the stats source might send as one).
        **counters: Any of ai_info, terms, quiz_score, quiz_correct, quiz_total.
    """
    return RawDayRecord.model_validate({"date": day, **counters})


@pytest.fixture
def sample_records() -> list[RawDayRecord]:
    """
    Activity on 2024-06-01 (reported twice) and 2024-06-03, none on 06-02.

    The 06-01 duplicate carries a higher info count but a lower term count
    and quiz count, so the field-wise maximum differs from both inputs.
    """
    return [
        make_record("2024-06-01", ai_info=1, terms=10, quiz_correct=2, quiz_total=4),
        make_record("2024-06-01", ai_info=2, terms=5, quiz_correct=1, quiz_total=4),
        make_record("2024-06-03", ai_info=3, terms=60, quiz_correct=4, quiz_total=4),
    ]


@pytest.fixture
def sample_period_stats(sample_records: list[RawDayRecord]) -> PeriodStats:
    """Period stats for 2024-06-01..2024-06-03 wrapping sample_records."""
    return PeriodStats(
        period_data=sample_records,
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 3),
        total_days=3,
    )


@pytest.fixture
def sample_user_stats() -> UserStats:
    """User stats payload as returned by the stats source."""
    return UserStats(
        today_ai_info=3,
        total_learned=12,
        total_ai_info_available=3,
        today_terms=60,
        total_terms_learned=240,
        total_terms_available=60,
        today_quiz_score=100.0,
        today_quiz_correct=4,
        today_quiz_total=4,
        cumulative_quiz_score=640.0,
    )


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_stats_client(
    sample_period_stats: PeriodStats, sample_user_stats: UserStats
) -> MagicMock:
    """
    Create a mock StatsClient for unit testing.

    Returns the sample payloads without any network access.
    """
    mock = MagicMock()
    mock.get_period_stats = AsyncMock(return_value=sample_period_stats)
    mock.get_user_stats = AsyncMock(return_value=sample_user_stats)
    mock.aclose = AsyncMock()
    return mock
