"""
Rolling Window Averages

Computes the trailing-window mean of each normalized percentage series,
used for the weekly-achievement callouts on the dashboard.

The mean covers the last ``min(window, len(points))`` entries, so a
three-day series with window 7 averages all three days. An empty series
averages to 0 so display code never sees NaN.
"""

from typing import Sequence

import pandas as pd

from progress_dashboard.models.progress import NormalizedDayPoint, RollingAverages

SERIES_COLUMNS: list[str] = ["info_percent", "term_percent", "quiz_percent"]


def series_dataframe(points: Sequence[NormalizedDayPoint]) -> pd.DataFrame:
    """
    Convert normalized points to a DataFrame indexed by day key.

    An empty sequence yields an empty frame that still has the three
    percentage columns.
    """
    df = pd.DataFrame(
        [point.model_dump() for point in points],
        columns=["date", *SERIES_COLUMNS],
    )
    return df.set_index("date")


def rolling_means(
    points: Sequence[NormalizedDayPoint], window: int
) -> RollingAverages:
    """
    Average the trailing window of each percentage series independently.

    Stateless: repeated calls on an evolving series carry nothing over.

    Args:
        points: Normalized series in ascending date order.
        window: Trailing window size in days.

    Returns:
        RollingAverages with unrounded means and the number of points used.

    Raises:
        ValueError: If window is not positive.
    """
    if window <= 0:
        raise ValueError(f"Rolling window must be positive, got {window}")

    tail = series_dataframe(points).tail(window)
    if tail.empty:
        return RollingAverages(window=window)

    means = tail[SERIES_COLUMNS].astype(float).mean()
    return RollingAverages(
        window=window,
        points=len(tail),
        info_percent=float(means["info_percent"]),
        term_percent=float(means["term_percent"]),
        quiz_percent=float(means["quiz_percent"]),
    )
