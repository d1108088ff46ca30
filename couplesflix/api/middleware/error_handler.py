"""Global error handling middleware for consistent error responses."""

import logging
import traceback
from typing import Any, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError as PostgrestAPIError
from starlette.exceptions import HTTPException

from couplesflix.schemas.common import ErrorResponse, Upstream

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors.

    Raise a subclass from services; the handlers turn it into an
    ErrorResponse carrying `message` for the client's notification.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        details: list[dict[str, Any]] | None = None,
        upstream: Upstream | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category/type for client handling.
            details: Optional additional error details.
            upstream: External system that caused the failure, if any.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.upstream = upstream
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found",
            details=details,
        )


class ValidationError(APIError):
    """Request validation error, raised before any external call."""

    def __init__(self, message: str = "Validation error", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_type="validation_error",
            details=details,
        )


class ConflictError(APIError):
    """The request conflicts with existing state."""

    def __init__(self, message: str = "Conflict", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_type="conflict",
            details=details,
        )


class ExternalServiceError(APIError):
    """An upstream (watchlist tables, avatar storage, TMDB) failed."""

    def __init__(
        self,
        message: str = "Upstream service failed",
        upstream: Upstream | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_type="external_service_error",
            details=details,
            upstream=upstream,
        )


def from_postgrest_error(exc: PostgrestAPIError) -> ExternalServiceError:
    """Translate a failed table call, keeping the upstream message.

    The Postgres error code (e.g. `23505`) travels in the detail item.
    """
    details = None
    if exc.code or exc.details or exc.hint:
        context = exc.details or exc.hint or exc.message or ""
        details = [{"msg": str(context), "type": exc.code or "database_error"}]
    return ExternalServiceError(
        message=exc.message or "Database request failed",
        upstream=Upstream.DATABASE,
        details=details,
    )


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    details: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
    upstream: Upstream | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        error_type: Error category for client handling.
        message: Human-readable error description.
        status_code: HTTP status code.
        details: Optional error details.
        request_id: Optional request ID for tracing.
        upstream: Failing external system, if any.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse.build(
        error_type=error_type,
        message=message,
        upstream=upstream,
        details=details,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Exception handler for APIError raised inside route handlers."""
    request_id = request.headers.get("X-Request-ID")
    logger.warning(
        "API error: %s - %s",
        exc.error_type,
        exc.message,
        extra={"request_id": request_id, "status_code": exc.status_code, "upstream": exc.upstream},
    )
    return create_error_response(
        error_type=exc.error_type,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=request_id,
        upstream=exc.upstream,
    )


async def postgrest_error_handler(request: Request, exc: PostgrestAPIError) -> JSONResponse:
    """Exception handler for failed profiles/connections/watchlist calls."""
    logger.error("Database call failed on %s: %s (code %s)", request.url.path, exc.message, exc.code)
    return await api_error_handler(request, from_postgrest_error(exc))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Exception handler that wraps HTTPExceptions (401s, unknown routes) in ErrorResponse."""
    request_id = request.headers.get("X-Request-ID")
    logger.warning(
        "HTTP exception: %s - %s",
        exc.status_code,
        exc.detail,
        extra={"request_id": request_id},
    )
    response = create_error_response(
        error_type="http_error",
        message=str(exc.detail),
        status_code=exc.status_code,
        request_id=request_id,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Middleware to catch and format anything the exception handlers missed.

    Logs full stack traces for debugging while returning safe messages to clients.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    request_id = request.headers.get("X-Request-ID")

    try:
        return await call_next(request)

    except APIError as e:
        return await api_error_handler(request, e)

    except PostgrestAPIError as e:
        return await postgrest_error_handler(request, e)

    except Exception as e:
        logger.error(
            "Unhandled exception: %s\n%s",
            str(e),
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="internal_error",
            message="An unexpected error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id=request_id,
        )
