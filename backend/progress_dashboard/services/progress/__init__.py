"""
Learning Progress Services

The progress aggregation engine and the dashboard service built on it.

Modules:
- date_range: gap-free calendar day keys
- merger: per-day deduplication with field-wise maximum
- normalizer: fixed-denominator percentages
- rolling: trailing-window averages
- engine: the full aggregation pass and its configuration
- period: week / month / custom window resolution
- dashboard: dashboard payload assembly
- service: async orchestration over the stats client

Usage:
    from progress_dashboard.services.progress import (
        AggregationConfig,
        aggregate_progress,
        ProgressService,
    )
"""

from progress_dashboard.services.progress.dashboard import (
    build_dashboard,
    build_snapshots,
    compute_peaks,
)
from progress_dashboard.services.progress.date_range import (
    generate_date_range,
    is_day_key,
    parse_day_key,
)
from progress_dashboard.services.progress.engine import (
    AggregationConfig,
    AggregationResult,
    aggregate_progress,
)
from progress_dashboard.services.progress.merger import merge_day_records, merge_pair
from progress_dashboard.services.progress.normalizer import (
    normalize_day,
    normalize_series,
    to_percent,
)
from progress_dashboard.services.progress.period import resolve_period
from progress_dashboard.services.progress.rolling import rolling_means, series_dataframe
from progress_dashboard.services.progress.service import ProgressService

__all__ = [
    # Engine
    "AggregationConfig",
    "AggregationResult",
    "aggregate_progress",
    "generate_date_range",
    "is_day_key",
    "parse_day_key",
    "merge_day_records",
    "merge_pair",
    "normalize_day",
    "normalize_series",
    "to_percent",
    "rolling_means",
    "series_dataframe",
    # Dashboard
    "build_dashboard",
    "build_snapshots",
    "compute_peaks",
    "resolve_period",
    "ProgressService",
]
