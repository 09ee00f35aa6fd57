"""
Unit Tests for Period Window Resolution.

Tests the week / month / custom presets used by the dashboard.
"""

from datetime import date

import pytest

from progress_dashboard.enums.progress import PeriodType
from progress_dashboard.models.progress import DateWindow
from progress_dashboard.services.progress.period import resolve_period, trailing_window


@pytest.fixture
def today() -> date:
    """Fixed reference day for deterministic windows."""
    return date(2024, 6, 30)


class TestTrailingWindow:
    """Tests for trailing_window."""

    def test_ends_today(self, today: date) -> None:
        window = trailing_window(today, 7)

        assert window == DateWindow(start=date(2024, 6, 24), end=today)
        assert window.day_count == 7

    def test_single_day(self, today: date) -> None:
        assert trailing_window(today, 1) == DateWindow(start=today, end=today)


class TestResolvePeriod:
    """Tests for resolve_period."""

    def test_week(self, today: date) -> None:
        window = resolve_period(PeriodType.WEEK, today)

        assert window.start == date(2024, 6, 24)
        assert window.end == today

    def test_month(self, today: date) -> None:
        window = resolve_period(PeriodType.MONTH, today)

        assert window.start == date(2024, 6, 1)
        assert window.day_count == 30

    def test_month_across_year_boundary(self) -> None:
        window = resolve_period(PeriodType.MONTH, date(2024, 1, 10))

        assert window.start == date(2023, 12, 12)

    def test_custom_bounds(self, today: date) -> None:
        window = resolve_period(
            PeriodType.CUSTOM,
            today,
            custom_start=date(2024, 5, 1),
            custom_end=date(2024, 5, 15),
        )

        assert window == DateWindow(start=date(2024, 5, 1), end=date(2024, 5, 15))
        assert window.day_count == 15

    def test_custom_inverted_passes_through(self, today: date) -> None:
        """An inverted custom window is kept; the engine renders it as "no data"."""
        window = resolve_period(
            PeriodType.CUSTOM,
            today,
            custom_start=date(2024, 5, 15),
            custom_end=date(2024, 5, 1),
        )

        assert window.start == date(2024, 5, 15)
        assert window.day_count == 0

    @pytest.mark.parametrize(
        "custom_start,custom_end",
        [
            pytest.param(None, None, id="no_bounds"),
            pytest.param(date(2024, 5, 1), None, id="start_only"),
            pytest.param(None, date(2024, 5, 15), id="end_only"),
        ],
    )
    def test_incomplete_custom_falls_back_to_week(
        self, today: date, custom_start, custom_end
    ) -> None:
        window = resolve_period(
            PeriodType.CUSTOM, today, custom_start=custom_start, custom_end=custom_end
        )

        assert window == resolve_period(PeriodType.WEEK, today)

    def test_custom_preset_lengths(self, today: date) -> None:
        assert resolve_period(PeriodType.WEEK, today, week_days=14).day_count == 14
        assert resolve_period(PeriodType.MONTH, today, month_days=31).day_count == 31

    def test_presets_ignore_custom_bounds(self, today: date) -> None:
        window = resolve_period(
            PeriodType.MONTH,
            today,
            custom_start=date(2024, 1, 1),
            custom_end=date(2024, 1, 2),
        )

        assert window.end == today
