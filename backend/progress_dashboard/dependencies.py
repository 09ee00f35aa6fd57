"""
FastAPI Dependencies

Shared dependencies for the stats client and the progress service.

The stats client is created once per application (in the lifespan handler
of main.py) and stored on ``app.state``; tests override these dependencies
with ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from progress_dashboard.clients.stats_client import StatsClient
from progress_dashboard.services.progress import AggregationConfig, ProgressService


def get_stats_client(request: Request) -> StatsClient:
    """Return the application's shared stats client."""
    return request.app.state.stats_client


def get_aggregation_config(request: Request) -> AggregationConfig:
    """Return the application's aggregation constants."""
    return request.app.state.aggregation_config


async def get_progress_service(
    client: StatsClient = Depends(get_stats_client),
    config: AggregationConfig = Depends(get_aggregation_config),
) -> ProgressService:
    """Get progress service."""
    return ProgressService(client, config)
