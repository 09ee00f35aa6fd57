"""API Routers package."""

from progress_dashboard.routers import health as health_router
from progress_dashboard.routers import progress as progress_router

__all__ = ["health_router", "progress_router"]
