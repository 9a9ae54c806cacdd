"""Application errors and the FastAPI handlers that render them.

Every error response has the same envelope::

    {"error": {"message": "...", "details": {...}}}
"""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from cms.core.logging import get_logger

logger = get_logger(__name__)


def _get_cors_headers(request: Request) -> dict[str, str]:
    """CORS headers for error responses, which bypass the CORS middleware."""
    origin = request.headers.get("origin", "")
    # Import here to avoid circular imports
    from cms.core.config import get_settings
    allowed = get_settings().cors_origins

    if not origin or (origin not in allowed and "*" not in allowed):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS, PATCH",
        "Access-Control-Allow-Headers": "Authorization, Content-Type",
    }


def _error_response(
    request: Request,
    status_code: int,
    message: Any,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"message": message}
    if details is not None:
        body["details"] = details

    response_headers = _get_cors_headers(request)
    if headers:
        response_headers.update(headers)

    return JSONResponse(
        status_code=status_code,
        content={"error": body},
        headers=response_headers,
    )


class AppException(Exception):
    """Base application exception."""

    headers: dict[str, str] | None = None

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(AppException):
    """Missing, malformed or expired access token."""

    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class AuthorizationError(AppException):
    """Authenticated, but the role is too low."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", status.HTTP_404_NOT_FOUND)


class ConflictError(AppException):
    """Resource conflict (e.g., duplicate slug)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class SlugExhaustedError(ConflictError):
    """No free slug was found within the allowed number of probes."""

    def __init__(self, base_slug: str, attempts: int):
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"Could not find a free slug for '{base_slug}' after {attempts} attempts",
            {"slug": base_slug, "attempts": attempts},
        )


class ValidationError(AppException):
    """Input that passed schema validation but breaks a content rule."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class DatabaseError(AppException):
    """The database could not be reached."""

    def __init__(self, message: str = "Database temporarily unavailable"):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application exceptions."""
    logger.warning(
        "Application exception",
        status_code=exc.status_code,
        message=exc.message,
        details=exc.details,
        path=str(request.url),
    )
    return _error_response(request, exc.status_code, exc.message, exc.details, exc.headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by FastAPI and Starlette."""
    logger.warning(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=str(request.url),
    )
    return _error_response(request, exc.status_code, exc.detail, headers=exc.headers)


async def database_exception_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """Render lost database connections as 503."""
    logger.error("Database unavailable", error=str(exc.orig), path=str(request.url))
    return await app_exception_handler(request, DatabaseError())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception(
        "Unhandled exception",
        exc_info=exc,
        path=str(request.url),
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred. Please try again later.",
    )
