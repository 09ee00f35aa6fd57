"""
Percent Normalization

Maps merged day records onto fixed-denominator percentages, one point per
day of the requested window.

Formulas (rounded half-up to the nearest integer percent):
- info_percent = info_count / info_denominator * 100
- term_percent = term_count / term_denominator * 100
- quiz_percent = quiz_correct / quiz_total * 100, or 0 when quiz_total is 0

Days without a merged record are zero-filled. Percentages are not clamped:
over-completion (e.g. 5 of 3 items -> 167) is preserved for the caller to
clamp at render time if it wants to.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from progress_dashboard.models.progress import MergedDayRecord, NormalizedDayPoint

_ONE = Decimal(1)
_HUNDRED = Decimal(100)


def to_percent(numerator: int, denominator: int) -> int:
    """
    Convert a ratio to an integer percentage, rounding half-up.

    Uses Decimal so that exact halves (1/8 -> 12.5) always round up instead
    of following binary float or banker's rounding.

    Args:
        numerator: Count achieved.
        denominator: Count possible. A non-positive denominator yields 0.

    Returns:
        int: Rounded percentage, unclamped.
    """
    if denominator <= 0:
        return 0
    ratio = Decimal(numerator) * _HUNDRED / Decimal(denominator)
    return int(ratio.quantize(_ONE, rounding=ROUND_HALF_UP))


def normalize_day(
    date_key: str,
    record: Optional[MergedDayRecord],
    info_denominator: int,
    term_denominator: int,
) -> NormalizedDayPoint:
    """Normalize a single day; a missing record yields an all-zero point."""
    if record is None:
        return NormalizedDayPoint(date=date_key)

    return NormalizedDayPoint(
        date=date_key,
        info_percent=to_percent(record.info_count, info_denominator),
        term_percent=to_percent(record.term_count, term_denominator),
        quiz_percent=to_percent(record.quiz_correct, record.quiz_total),
    )


def normalize_series(
    date_keys: Sequence[str],
    merged: Mapping[str, MergedDayRecord],
    info_denominator: int,
    term_denominator: int,
) -> list[NormalizedDayPoint]:
    """
    Build the normalized series for a window.

    The output follows ``date_keys`` exactly (same length, same order), so
    merged records outside the window are ignored and days inside it without
    a record become zero points.

    Args:
        date_keys: Ordered day keys from generate_date_range().
        merged: Day key to merged record mapping from merge_day_records().
        info_denominator: Informational catalog size.
        term_denominator: Vocabulary catalog size.

    Returns:
        list[NormalizedDayPoint]: One point per day key.

    Raises:
        ValueError: If a catalog denominator is not positive.
    """
    if info_denominator <= 0 or term_denominator <= 0:
        raise ValueError(
            f"Denominators must be positive (info={info_denominator}, "
            f"terms={term_denominator})"
        )

    return [
        normalize_day(date_key, merged.get(date_key), info_denominator, term_denominator)
        for date_key in date_keys
    ]
