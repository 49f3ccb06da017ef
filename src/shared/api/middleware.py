"""
Shared API Middleware
======================

Common middleware and exception handlers for the FastAPI application.
"""

import time
import uuid
from contextlib import contextmanager
from typing import Callable, Iterator

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from src.core import ApplicationException, RepositoryException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Adds correlation ID to requests for tracing.

    The ID is taken from the X-Correlation-ID header when the caller sends
    one and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))

        # Store in request state for access in endpoints
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs all requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = getattr(request.state, "correlation_id", "unknown")
        start_time = time.perf_counter()

        logger.info(
            "Request started",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            response_time = time.perf_counter() - start_time
            logger.error(
                "Request failed",
                extra={
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(e),
                    "response_time_ms": int(response_time * 1000)
                }
            )
            raise

        response_time = time.perf_counter() - start_time
        logger.info(
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "response_time_ms": int(response_time * 1000)
            }
        )
        return response


@contextmanager
def translate_errors(message: str, request: Request) -> Iterator[None]:
    """
    Turn unexpected failures inside a handler into a generic error.

    Application exceptions (not found, validation, unavailable) pass through
    unchanged. Anything else is logged and re-raised as a RepositoryException
    carrying only ``message``.

    Usage:
        with translate_errors("Error fetching users", request):
            users = await service.list_users()
    """
    try:
        yield
    except ApplicationException:
        raise
    except Exception as e:
        logger.error(
            message,
            extra={
                "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                "path": request.url.path,
                "method": request.method,
                "error_type": type(e).__name__,
                "error_message": str(e)
            }
        )
        raise RepositoryException(message) from e


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """Render application exceptions as {"message": ...} with their status code."""
    if exc.status_code >= 500:
        logger.warning(
            "Request ended with server error",
            extra={
                "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_message": exc.message
            }
        )

    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Render malformed bodies and path parameters as a 400 {"message": ...}.

    Only the location of the first offending field is reported.
    """
    errors = exc.errors()
    location = ".".join(str(part) for part in errors[0]["loc"]) if errors else "request"

    logger.info(
        "Request rejected",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "path": request.url.path,
            "method": request.method,
            "location": location
        }
    )

    return JSONResponse(status_code=400, content={"message": f"Invalid value for {location}"})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.

    Internal details are logged, never returned.
    """
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": correlation_id,
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal server error",
            "correlation_id": correlation_id
        }
    )
