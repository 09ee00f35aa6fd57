"""
Health Endpoint

Endpoints:
- GET /api/health - Liveness probe
"""

from fastapi import APIRouter

from progress_dashboard.config import settings

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """Report that the API process is up. Does not call the stats source."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
    }
