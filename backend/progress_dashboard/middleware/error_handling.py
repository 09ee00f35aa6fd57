"""
Error Handling Middleware

Turns failures anywhere in a request into one JSON error shape that the
dashboard frontend can render.

Response body:
    {"error": <code>, "message": <text>, "error_id": <8 chars>,
     "details": <dict or null>, "timestamp": <ISO 8601>}

``error_id`` is also written to the log line, so a user-reported id can be
traced to the server log. ``details`` and stack traces are only returned
when the app runs with DEBUG enabled.

Usage:
    from progress_dashboard.middleware.error_handling import (
        StatsFetchError,
        handle_endpoint_errors,
        setup_error_handling,
    )

    setup_error_handling(app, debug=settings.DEBUG)

    raise StatsFetchError("Stats source unavailable")

Exception handling hierarchy:
    - HTTPException: Re-raised for FastAPI's built-in handler
    - ServiceError: Custom exceptions -> structured JSON response
    - Exception: Catch-all for unexpected errors -> sanitized response
"""

import functools
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Custom Exceptions
# =============================================================================


class ServiceError(Exception):
    """
    Base class for errors with a known HTTP mapping.

    Subclasses set ``status_code`` and ``error_code``; both can also be
    overridden per instance. ``details`` is only exposed in DEBUG mode.

    Example:
        raise ServiceError("Stats source misconfigured", status_code=503)
    """

    status_code: int = 500
    error_code: str = "service_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code
        if error_code:
            self.error_code = error_code
        self.details = details


class StatsFetchError(ServiceError):
    """
    Stats source error.

    Raised when the remote stats source cannot be reached, keeps failing
    after retries, or returns a payload that does not validate.
    """

    status_code = 502
    error_code = "stats_fetch_error"


class NotFoundError(ServiceError):
    """The stats source does not know the requested session."""

    status_code = 404
    error_code = "not_found"


# =============================================================================
# Error Handling Middleware
# =============================================================================


def _error_body(
    error_code: str,
    message: str,
    error_id: str,
    details: Optional[dict] = None,
) -> dict[str, Any]:
    return {
        "error": error_code,
        "message": message,
        "error_id": error_id,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Outermost safety net for errors no route or exception handler caught.

    ServiceErrors raised inside routes are normally rendered by
    service_error_handler first; anything else ends up here as a 500 with
    the exception text hidden unless debug is on.
    """

    def __init__(self, app, debug: bool = False):
        """
        Args:
            app: ASGI application to wrap
            debug: Return exception type, message and traceback in details
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        error_id = str(uuid4())[:8]

        try:
            return await call_next(request)

        except HTTPException:
            raise

        except ServiceError as e:
            logger.error(
                f"[{error_id}] {e.error_code}: {e.message}",
                extra={
                    "error_id": error_id,
                    "error_code": e.error_code,
                    "path": request.url.path,
                    "method": request.method,
                },
            )
            return JSONResponse(
                status_code=e.status_code,
                content=_error_body(
                    e.error_code,
                    e.message,
                    error_id,
                    e.details if self.debug else None,
                ),
            )

        except Exception as e:
            logger.error(
                f"[{error_id}] Unhandled error: {type(e).__name__}: {e}",
                extra={
                    "error_id": error_id,
                    "path": request.url.path,
                    "method": request.method,
                    "traceback": traceback.format_exc(),
                },
            )

            details = None
            if self.debug:
                details = {
                    "exception": type(e).__name__,
                    "message": str(e),
                    "traceback": traceback.format_exc(),
                }

            return JSONResponse(
                status_code=500,
                content=_error_body(
                    "internal_server_error",
                    "An unexpected error occurred",
                    error_id,
                    details,
                ),
            )


def make_service_error_handler(
    debug: bool = False,
) -> Callable[[Request, ServiceError], Awaitable[JSONResponse]]:
    """Build the exception handler that renders ServiceError raised in routes."""

    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        error_id = str(uuid4())[:8]
        logger.error(f"[{error_id}] {exc.error_code}: {exc.message} ({request.url.path})")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                exc.error_code,
                exc.message,
                error_id,
                exc.details if debug else None,
            ),
        )

    return service_error_handler


# =============================================================================
# Setup Function
# =============================================================================


def setup_error_handling(app: FastAPI, debug: bool = False) -> None:
    """
    Register the ServiceError handler and the catch-all middleware.

    Args:
        app: Application to configure
        debug: Expose error details and tracebacks in responses
    """
    app.add_exception_handler(ServiceError, make_service_error_handler(debug))
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    logger.info(f"Error handling middleware enabled (debug={debug})")


# =============================================================================
# Endpoint Decorator
# =============================================================================


def handle_endpoint_errors(
    operation: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Normalize errors raised by an async route handler.

    - HTTPException and ServiceError pass through unchanged
    - ValueError becomes 400 Bad Request
    - Anything else is logged with traceback and becomes 500

    Args:
        operation: Human-readable operation name used in logs and messages.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except (HTTPException, ServiceError):
                raise
            except ValueError as e:
                logger.warning(f"{operation} rejected: {e}")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
                )
            except Exception as e:
                logger.exception(f"{operation} failed: {e}")
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"{operation} failed",
                )

        return wrapper

    return decorator
