"""Learning Progress backend: progress aggregation engine and dashboard API."""

__version__ = "0.1.0"
