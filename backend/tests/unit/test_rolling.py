"""
Unit Tests for Rolling Window Averages.

Tests the trailing-window means and the DataFrame view of the series.
"""

import pytest

from progress_dashboard.models.progress import NormalizedDayPoint, RollingAverages
from progress_dashboard.services.progress.rolling import (
    SERIES_COLUMNS,
    rolling_means,
    series_dataframe,
)


def _series(*info_percents: int) -> list[NormalizedDayPoint]:
    return [
        NormalizedDayPoint(
            date=f"2024-06-{index + 1:02d}",
            info_percent=value,
            term_percent=value // 2,
            quiz_percent=100 - value,
        )
        for index, value in enumerate(info_percents)
    ]


class TestSeriesDataFrame:
    """Tests for series_dataframe."""

    def test_indexed_by_date(self) -> None:
        df = series_dataframe(_series(0, 50))

        assert list(df.index) == ["2024-06-01", "2024-06-02"]
        assert list(df.columns) == SERIES_COLUMNS
        assert df.loc["2024-06-02", "info_percent"] == 50

    def test_empty_keeps_columns(self) -> None:
        df = series_dataframe([])

        assert df.empty
        assert list(df.columns) == SERIES_COLUMNS


class TestRollingMeans:
    """Tests for rolling_means."""

    def test_short_sequence_averages_available_points(self) -> None:
        """[0, 50, 100] with a 7-day window averages 3 points to 50."""
        result = rolling_means(_series(0, 50, 100), window=7)

        assert result.info_percent == pytest.approx(50.0)
        assert result.points == 3
        assert result.window == 7

    def test_uses_trailing_window_only(self) -> None:
        series = _series(100, 100, 0, 20, 40)

        result = rolling_means(series, window=3)

        assert result.points == 3
        assert result.info_percent == pytest.approx(20.0)
        assert result.term_percent == pytest.approx(10.0)
        assert result.quiz_percent == pytest.approx(80.0)

    def test_series_are_independent(self) -> None:
        result = rolling_means(_series(0, 50, 100), window=7)

        assert result.term_percent == pytest.approx((0 + 25 + 50) / 3)
        assert result.quiz_percent == pytest.approx(50.0)

    def test_means_are_unrounded(self) -> None:
        result = rolling_means(_series(0, 0, 100), window=7)

        assert result.info_percent == pytest.approx(100 / 3)

    def test_empty_sequence_is_zero(self) -> None:
        result = rolling_means([], window=7)

        assert result == RollingAverages(window=7)
        assert result.info_percent == 0.0
        assert result.points == 0

    def test_stateless(self) -> None:
        """Repeated calls on a growing series carry nothing over."""
        series = _series(100)
        first = rolling_means(series, window=2)

        series.extend(_series(100, 0)[1:])
        second = rolling_means(series, window=2)

        assert first.info_percent == pytest.approx(100.0)
        assert second.info_percent == pytest.approx(50.0)
        assert rolling_means(_series(100), window=2) == first

    @pytest.mark.parametrize("window", [0, -7])
    def test_non_positive_window_raises(self, window: int) -> None:
        with pytest.raises(ValueError, match="Rolling window must be positive"):
            rolling_means(_series(10), window=window)
