"""
Learning Progress API

FastAPI application serving the learning progress dashboard.

Run with:
    uvicorn progress_dashboard.main:app --reload
    python -m progress_dashboard.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from progress_dashboard.clients.stats_client import StatsClient
from progress_dashboard.config import Settings, settings
from progress_dashboard.middleware.error_handling import setup_error_handling
from progress_dashboard.routers import health_router, progress_router
from progress_dashboard.services.progress import AggregationConfig

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, level: str = "INFO") -> None:
    """Configure logging based on debug flag."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    # Reduce noise from httpx (unless debugging)
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        app_settings: Settings to use (default: global settings).

    Returns:
        Configured FastAPI app with routers and error handling.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.stats_client = StatsClient(
            base_url=app_settings.STATS_API_BASE_URL,
            timeout=app_settings.STATS_API_TIMEOUT,
            max_retries=app_settings.STATS_API_MAX_RETRIES,
        )
        logger.info(f"Stats source: {app_settings.STATS_API_BASE_URL}")
        try:
            yield
        finally:
            await app.state.stats_client.aclose()

    app = FastAPI(title=f"{app_settings.APP_NAME} API", lifespan=lifespan)
    app.state.aggregation_config = AggregationConfig.from_settings(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handling(app, debug=app_settings.DEBUG)

    app.include_router(health_router.router)
    app.include_router(progress_router.router)

    @app.get("/")
    async def root():
        return {"message": f"{app_settings.APP_NAME} API"}

    return app


setup_logging(settings.DEBUG, settings.LOG_LEVEL)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("progress_dashboard.main:app", host="0.0.0.0", port=8080, reload=settings.DEBUG)
