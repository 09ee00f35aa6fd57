"""
Progress Aggregation Engine

Turns a sparse, possibly duplicated, possibly gapped list of raw per-day
counters into a complete normalized series plus rolling-window averages.

Pipeline:
    raw records -> merge_day_records()           (dedup, field-wise max)
    (start, end) -> generate_date_range()        (gap-free day keys)
    both         -> normalize_series()           (fixed-denominator percents)
    series       -> rolling_means()              (trailing window averages)

Every step is a pure function of its inputs: no I/O, no shared state, no
mutation of the caller's records. Call it again whenever inputs change.

Usage:
    from progress_dashboard.services.progress import AggregationConfig, aggregate_progress

    config = AggregationConfig.from_settings()
    result = aggregate_progress(records, "2024-06-01", "2024-06-07", config)
    result.series[-1].info_percent
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from progress_dashboard.config import Settings, settings, yaml_config
from progress_dashboard.models.progress import (
    MergedDayRecord,
    NormalizedDayPoint,
    RawDayRecord,
    RollingAverages,
)
from progress_dashboard.services.progress.date_range import DateLike, generate_date_range
from progress_dashboard.services.progress.merger import merge_day_records
from progress_dashboard.services.progress.normalizer import normalize_series
from progress_dashboard.services.progress.rolling import rolling_means


@dataclass(frozen=True)
class AggregationConfig:
    """
    Externally supplied constants for the aggregation engine.

    Attributes:
        info_denominator: Informational catalog size (default 3).
        term_denominator: Vocabulary catalog size (default 60).
        rolling_window: Trailing window for averages, in days.
        week_days: Length of the WEEK period preset.
        month_days: Length of the MONTH period preset.
    """

    info_denominator: int = 3
    term_denominator: int = 60
    rolling_window: int = 7
    week_days: int = 7
    month_days: int = 30

    def __post_init__(self) -> None:
        for name in ("info_denominator", "term_denominator", "rolling_window", "week_days", "month_days"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_settings(
        cls,
        app_settings: Optional[Settings] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "AggregationConfig":
        """
        Build the config from application settings.

        Precedence: an explicitly set environment (or .env) value, then the
        ``aggregation`` section of config/default.yaml, then the Settings
        default.

        Args:
            app_settings: Settings instance (default: global settings).
            overrides: Mapping with any of info_denominator, term_denominator,
                rolling_window (default: yaml ``aggregation`` section).
        """
        app_settings = app_settings or settings
        if overrides is None:
            overrides = yaml_config.get("aggregation", {}) or {}

        def pick(setting: str, key: str) -> int:
            if setting in app_settings.model_fields_set or key not in overrides:
                return getattr(app_settings, setting)
            return int(overrides[key])

        return cls(
            info_denominator=pick("INFO_DENOMINATOR", "info_denominator"),
            term_denominator=pick("TERM_DENOMINATOR", "term_denominator"),
            rolling_window=pick("ROLLING_WINDOW_DAYS", "rolling_window"),
            week_days=app_settings.WEEK_PERIOD_DAYS,
            month_days=app_settings.MONTH_PERIOD_DAYS,
        )


@dataclass(frozen=True)
class AggregationResult:
    """Output of a single aggregation pass."""

    date_keys: list[str]
    merged: dict[str, MergedDayRecord]
    series: list[NormalizedDayPoint]
    rolling: RollingAverages
    config: AggregationConfig = field(repr=False, default_factory=AggregationConfig)

    @property
    def is_empty_window(self) -> bool:
        """True when the requested window contained no days (start > end)."""
        return not self.date_keys

    @property
    def last_point(self) -> Optional[NormalizedDayPoint]:
        """Most recent point of the series, the source of the "today" cards."""
        return self.series[-1] if self.series else None


def aggregate_progress(
    records: Optional[Iterable[RawDayRecord]],
    start: DateLike,
    end: DateLike,
    config: Optional[AggregationConfig] = None,
) -> AggregationResult:
    """
    Run a full aggregation pass.

    Empty or None records yield an all-zero series spanning the whole
    window, so the chart always has a drawable baseline. An inverted window
    yields an empty series.

    Args:
        records: Raw records from the stats source.
        start: First day of the window (date or YYYY-MM-DD).
        end: Last day of the window (date or YYYY-MM-DD).
        config: Engine constants (default: from settings).

    Returns:
        AggregationResult with the merged mapping, series and averages.

    Raises:
        ValueError: If a window boundary string is not a valid day key.
    """
    config = config or AggregationConfig.from_settings()

    merged = merge_day_records(records)
    date_keys = generate_date_range(start, end)
    series = normalize_series(
        date_keys, merged, config.info_denominator, config.term_denominator
    )
    rolling = rolling_means(series, config.rolling_window)

    return AggregationResult(
        date_keys=date_keys,
        merged=merged,
        series=series,
        rolling=rolling,
        config=config,
    )
