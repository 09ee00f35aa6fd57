#!/usr/bin/env python3
"""
Progress Aggregation Script

Run the progress aggregation engine over a JSON file of raw per-day
records, without a stats source or API server.

Input file formats:
    # A bare list of records
    [{"date": "2024-06-01", "ai_info": 1, "terms": 10, "quiz_correct": 2, "quiz_total": 4}]

    # A period-stats payload (start/end are used when --start/--end are omitted)
    {"period_data": [...], "start_date": "2024-06-01", "end_date": "2024-06-07"}

Usage:
    python scripts/aggregate_progress.py data/period.json
    python scripts/aggregate_progress.py data/period.json --start 2024-06-01 --end 2024-06-30
    python scripts/aggregate_progress.py data/period.json --format json
    python scripts/aggregate_progress.py data/records.json --start 2024-06-01 --end 2024-06-07 \
        --info-denominator 5 --term-denominator 100 --window 3

Environment Variables (set in .env or environment):
    INFO_DENOMINATOR, TERM_DENOMINATOR, ROLLING_WINDOW_DAYS: engine defaults
    (an explicit value wins over config/default.yaml)
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

# Add backend to path for imports (must be before progress_dashboard.* imports)
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
if (project_root / ".env").exists():
    load_dotenv(project_root / ".env")

from progress_dashboard.clients.stats_client import parse_period_stats
from progress_dashboard.middleware.error_handling import StatsFetchError
from progress_dashboard.services.progress import (
    AggregationConfig,
    build_dashboard,
    series_dataframe,
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def load_payload(path: Path, start: Optional[str], end: Optional[str]) -> dict[str, Any]:
    """Load records from disk and wrap them as a period-stats payload."""
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, list):
        data = {"period_data": data}
    if not isinstance(data, dict):
        raise ValueError("Input must be a list of records or a period-stats object")

    if start:
        data["start_date"] = start
    if end:
        data["end_date"] = end

    missing = [key for key in ("start_date", "end_date") if not data.get(key)]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)}: pass --start/--end")
    return data


def build_config(args: argparse.Namespace) -> AggregationConfig:
    """
    Apply CLI overrides on top of the configured engine constants.

    Raises:
        ValueError: If an override is not a positive integer.
    """
    base = AggregationConfig.from_settings()
    return AggregationConfig(
        info_denominator=(
            args.info_denominator if args.info_denominator is not None else base.info_denominator
        ),
        term_denominator=(
            args.term_denominator if args.term_denominator is not None else base.term_denominator
        ),
        rolling_window=args.window if args.window is not None else base.rolling_window,
        week_days=base.week_days,
        month_days=base.month_days,
    )


def print_table(dashboard) -> None:
    """Print the normalized series and averages in a readable format."""
    print("\n" + "=" * 60)
    print(f"LEARNING PROGRESS {dashboard.start_date} ~ {dashboard.end_date}")
    print("=" * 60)

    if not dashboard.series:
        print("\nNo data for this selection.")
        return

    print()
    print(series_dataframe(dashboard.series).to_string())

    rolling = dashboard.rolling
    print(f"\n{'─' * 60}")
    print(f"Last {rolling.points} day(s) average (window {rolling.window}):")
    print(f"  Info:  {rolling.info_percent:.1f}%")
    print(f"  Terms: {rolling.term_percent:.1f}%")
    print(f"  Quiz:  {rolling.quiz_percent:.1f}%")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Aggregate raw learning-progress records into a daily percentage series."
    )
    parser.add_argument("input", type=Path, help="JSON file with raw records")
    parser.add_argument("--start", help="Window start (YYYY-MM-DD)")
    parser.add_argument("--end", help="Window end (YYYY-MM-DD)")
    parser.add_argument("--info-denominator", type=int, help="Informational catalog size")
    parser.add_argument("--term-denominator", type=int, help="Vocabulary catalog size")
    parser.add_argument("--window", type=int, help="Rolling window in days")
    parser.add_argument(
        "--format", choices=["table", "json"], default="table", help="Output format"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logging(args.debug)

    try:
        payload = load_payload(args.input, args.start, args.end)
        period_stats = parse_period_stats(payload)
        dashboard = build_dashboard(period_stats, build_config(args))
    except FileNotFoundError as e:
        print(f"❌ File not found: {e.filename}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"❌ Invalid JSON: {e}", file=sys.stderr)
        return 1
    except StatsFetchError as e:
        print(f"❌ Invalid payload: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(dashboard.model_dump_json(indent=2))
    else:
        print_table(dashboard)

    return 0


if __name__ == "__main__":
    sys.exit(main())
