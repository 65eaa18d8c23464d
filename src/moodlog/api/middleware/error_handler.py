"""
Error Handler Middleware

Provides consistent error handling and response formatting.
Logs errors with correlation IDs for debugging.

Domain errors map to fixed HTTP responses:
    ValidationError       -> 400
    SessionNotFoundError  -> 404
    PersistenceError      -> 500
    ModelInvocationError  -> 503

PRIVACY: Error payloads never echo request bodies or transcripts.
"""

import traceback
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from moodlog.config import get_settings
from moodlog.config.logging_config import bind_correlation_id, clear_context, get_logger
from moodlog.domain.exceptions import (
    ModelInvocationError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from moodlog.infrastructure.monitoring import capture_exception_with_context

logger = get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Provides:
    - Correlation ID tracking for all requests
    - Generic 500 response for anything unhandled
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with error handling."""

        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid4())
        bind_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            logger.error(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
                traceback=traceback.format_exc(),
            )
            capture_exception_with_context(e, extra={"path": request.url.path})

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "Internal server error",
                    "correlation_id": correlation_id,
                    "message": "An unexpected error occurred. Please try again.",
                },
                headers={"X-Correlation-ID": correlation_id},
            )

        finally:
            clear_context()


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": exc.to_list()},
    )


async def model_invocation_error_handler(request: Request, exc: ModelInvocationError) -> JSONResponse:
    logger.warning(
        "Analysis model unavailable",
        path=request.url.path,
        cause_type=type(exc.cause).__name__ if exc.cause else None,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "AI analysis service temporarily unavailable",
            "message": "Please try again later",
        },
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Session persistence failed", path=request.url.path, error=str(exc))
    capture_exception_with_context(exc, extra={"path": request.url.path})

    # Detail only in debug, never in production
    message = str(exc) if get_settings().expose_error_details() else "Internal server error"
    error = "Failed to save session" if request.method == "POST" else "Failed to fetch sessions"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": error, "message": message},
    )


async def session_not_found_handler(request: Request, exc: SessionNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Session not found"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ModelInvocationError, model_invocation_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(SessionNotFoundError, session_not_found_handler)
