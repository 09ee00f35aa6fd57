"""
Unit Tests for Calendar Day Keys.

Tests for:
- Day key parsing (canonical YYYY-MM-DD only)
- Inclusive, gap-free date range generation
- Month, leap-year, year and daylight-saving boundaries
- Inverted windows
"""

from datetime import date, datetime, timedelta

import pytest

from progress_dashboard.services.progress.date_range import (
    generate_date_range,
    is_day_key,
    parse_day_key,
    to_date,
)


# =============================================================================
# Day Key Parsing
# =============================================================================


class TestParseDayKey:
    """Tests for parse_day_key and is_day_key."""

    def test_canonical_key(self) -> None:
        assert parse_day_key("2024-06-01") == date(2024, 6, 1)
        assert is_day_key("2024-06-01")

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("2024-6-1", id="not_zero_padded"),
            pytest.param("2024-02-30", id="impossible_day"),
            pytest.param("2024-13-01", id="impossible_month"),
            pytest.param("06/01/2024", id="wrong_format"),
            pytest.param("2024-06-01T00:00:00", id="timestamp"),
            pytest.param("", id="empty_string"),
            pytest.param(None, id="none"),
            pytest.param(20240601, id="integer"),
        ],
    )
    def test_rejects_malformed(self, value) -> None:
        """Anything but the zero-padded canonical form is not a day key."""
        assert parse_day_key(value) is None
        assert not is_day_key(value)

    def test_leap_day(self) -> None:
        assert is_day_key("2024-02-29")
        assert not is_day_key("2023-02-29")


class TestToDate:
    """Tests for boundary coercion."""

    def test_accepts_date_datetime_and_string(self) -> None:
        assert to_date(date(2024, 6, 1)) == date(2024, 6, 1)
        assert to_date(datetime(2024, 6, 1, 23, 59)) == date(2024, 6, 1)
        assert to_date("2024-06-01") == date(2024, 6, 1)

    def test_invalid_string_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid day key"):
            to_date("June 1st")


# =============================================================================
# Range Generation
# =============================================================================


class TestGenerateDateRange:
    """Tests for generate_date_range."""

    def test_inclusive_range(self) -> None:
        assert generate_date_range("2024-06-01", "2024-06-03") == [
            "2024-06-01",
            "2024-06-02",
            "2024-06-03",
        ]

    def test_single_day(self) -> None:
        assert generate_date_range("2024-06-01", "2024-06-01") == ["2024-06-01"]

    def test_inverted_range_is_empty(self) -> None:
        """start > end is a "no data" window, not an error."""
        assert generate_date_range("2024-06-03", "2024-06-01") == []

    def test_accepts_date_objects(self) -> None:
        assert generate_date_range(date(2024, 6, 1), date(2024, 6, 2)) == [
            "2024-06-01",
            "2024-06-02",
        ]

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            pytest.param(
                "2024-02-28",
                "2024-03-01",
                ["2024-02-28", "2024-02-29", "2024-03-01"],
                id="leap_year_february",
            ),
            pytest.param(
                "2023-02-28",
                "2023-03-01",
                ["2023-02-28", "2023-03-01"],
                id="common_year_february",
            ),
            pytest.param(
                "2023-12-31",
                "2024-01-01",
                ["2023-12-31", "2024-01-01"],
                id="year_boundary",
            ),
            pytest.param(
                "2024-03-09",
                "2024-03-11",
                ["2024-03-09", "2024-03-10", "2024-03-11"],
                id="us_spring_forward",
            ),
            pytest.param(
                "2024-10-26",
                "2024-10-28",
                ["2024-10-26", "2024-10-27", "2024-10-28"],
                id="eu_fall_back",
            ),
        ],
    )
    def test_calendar_boundaries(self, start: str, end: str, expected: list[str]) -> None:
        """Calendar stepping never skips or repeats a day."""
        assert generate_date_range(start, end) == expected

    def test_full_year_is_complete(self) -> None:
        """Every day of a leap year appears once, in ascending order."""
        keys = generate_date_range("2024-01-01", "2024-12-31")

        assert len(keys) == 366
        assert len(set(keys)) == 366
        assert keys == sorted(keys)
        for previous, current in zip(keys, keys[1:]):
            assert date.fromisoformat(current) - date.fromisoformat(previous) == timedelta(days=1)

    def test_invalid_boundary_raises(self) -> None:
        with pytest.raises(ValueError):
            generate_date_range("2024-6-1", "2024-06-03")
