"""
Middleware Package

Provides FastAPI middleware and helpers for error handling.
"""

from progress_dashboard.middleware.error_handling import (
    ErrorHandlingMiddleware,
    NotFoundError,
    ServiceError,
    StatsFetchError,
    handle_endpoint_errors,
    setup_error_handling,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "NotFoundError",
    "ServiceError",
    "StatsFetchError",
    "handle_endpoint_errors",
    "setup_error_handling",
]
