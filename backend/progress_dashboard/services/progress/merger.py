"""
Day Record Deduplication

Collapses raw records that share a day key into a single MergedDayRecord.

Merge Policy:
    Each numeric field is maximized independently; counts are never summed.
    The stats source may restate cumulative-to-date snapshots several times a
    day, so summing would double-count. ``max`` makes the fold associative
    and commutative: any input order yields the same mapping.

Usage:
    from progress_dashboard.services.progress.merger import merge_day_records

    merged = merge_day_records(period_stats.period_data)
    merged["2024-06-01"].info_count
"""

import logging
from typing import Iterable, Optional

from progress_dashboard.models.progress import MergedDayRecord, RawDayRecord
from progress_dashboard.services.progress.date_range import is_day_key

logger = logging.getLogger(__name__)

MERGED_FIELDS: tuple[str, ...] = (
    "info_count",
    "term_count",
    "quiz_score",
    "quiz_correct",
    "quiz_total",
)


def merge_pair(existing: MergedDayRecord, incoming: MergedDayRecord) -> MergedDayRecord:
    """
    Merge two records for the same day, field-wise maximum.

    Args:
        existing: Record accumulated so far.
        incoming: Record to fold in.

    Returns:
        A new MergedDayRecord; neither input is modified.
    """
    return MergedDayRecord(
        date=existing.date,
        **{
            field: max(getattr(existing, field), getattr(incoming, field))
            for field in MERGED_FIELDS
        },
    )


def merge_day_records(
    records: Optional[Iterable[RawDayRecord]],
) -> dict[str, MergedDayRecord]:
    """
    Fold raw records into one merged record per day key.

    Records with a missing or malformed day key are skipped and logged.
    Empty or None input yields an empty mapping.

    Args:
        records: Raw records in any order.

    Returns:
        dict[str, MergedDayRecord]: Mapping of day key to merged record.
    """
    merged: dict[str, MergedDayRecord] = {}
    if not records:
        return merged

    skipped = 0
    for record in records:
        if not is_day_key(record.date):
            skipped += 1
            logger.warning(f"Skipping progress record with invalid date: {record.date!r}")
            continue

        incoming = MergedDayRecord.from_raw(record)
        existing = merged.get(record.date)
        merged[record.date] = incoming if existing is None else merge_pair(existing, incoming)

    if skipped:
        logger.info(f"Merged {len(merged)} day(s), skipped {skipped} invalid record(s)")

    return merged
