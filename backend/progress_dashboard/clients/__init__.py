"""Clients for external services."""

from progress_dashboard.clients.stats_client import StatsClient, parse_period_stats

__all__ = ["StatsClient", "parse_period_stats"]
