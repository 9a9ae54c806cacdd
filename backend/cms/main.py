"""FastAPI application entry point."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware

from cms.api import dashboard_router, health_router, projects_router, slugs_router
from cms.core.config import get_settings
from cms.core.exceptions import (
    AppException,
    app_exception_handler,
    database_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from cms.core.logging import get_logger, setup_logging
from cms.db.session import close_db, init_db
from cms.services.cache import close_cache_service, get_cache_service

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events.

    Startup:
    - Initialize database connections
    - Resolve the cache (connects, or settles into pass-through mode)

    Shutdown:
    - Close the cache client
    - Close database connections
    """
    settings = get_settings()

    logger.info(
        "Starting application",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )

    # Initialize database with retry logic for transient connection failures
    for attempt in range(3):
        try:
            await init_db()
            break
        except Exception as exc:
            if attempt == 2:
                logger.error("Failed to initialize database after 3 attempts", error=str(exc))
                raise
            logger.warning(
                "Database init failed, retrying...",
                attempt=attempt + 1,
                error=str(exc),
            )
            await asyncio.sleep(2 ** attempt)
    logger.info("Database initialized")

    cache_service = get_cache_service()
    logger.info("Cache resolved", available=cache_service.is_available)

    yield

    logger.info("Shutting down application")

    await close_cache_service()
    await close_db()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard security headers to every response."""

    async def dispatch(self, request: Any, call_next: Any) -> Any:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Content API for the marketing site and its dashboard",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(OperationalError, database_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(projects_router, prefix="/api/v1")
    app.include_router(dashboard_router, prefix="/api/v1")
    app.include_router(slugs_router, prefix="/api/v1")

    return app


# Create application instance
app = create_app()
