"""Health check and monitoring endpoints."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from cms.api.schemas import HealthResponse, ServiceHealth
from cms.core.config import get_settings
from cms.db.session import check_db_health
from cms.services.cache import get_cache_service

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _timed_health_check(
    check_fn: Callable[[], Awaitable[bool]],
    timeout: float = 5.0,
) -> tuple[bool, float, str | None]:
    """Run a health check with timeout.

    Returns:
        Tuple of (healthy, latency_ms, error_message)
    """
    start = time.perf_counter()
    try:
        healthy = await asyncio.wait_for(check_fn(), timeout=timeout)
        error = None
    except asyncio.TimeoutError:
        healthy, error = False, f"Health check timed out after {timeout}s"
    except Exception as e:
        healthy, error = False, str(e)
    latency = (time.perf_counter() - start) * 1000
    return healthy, round(latency, 2), error


@router.get("/", summary="Root endpoint")
async def root() -> dict[str, Any]:
    """API name, version and environment."""
    settings = get_settings()

    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "environment": settings.environment,
        "timestamp": _now(),
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Comprehensive health check",
)
async def health_check() -> HealthResponse:
    """
    Health of the database and the cache.

    The database is critical (unhealthy when down); the cache is optional,
    so a missing or failing cache only degrades the status.
    """
    settings = get_settings()
    cache_service = get_cache_service()
    services: dict[str, ServiceHealth] = {}

    checks = [_timed_health_check(check_db_health)]
    if cache_service.is_available:
        checks.append(_timed_health_check(cache_service.check_health))

    results = await asyncio.gather(*checks)

    db_healthy, db_latency, db_error = results[0]
    db_details: dict[str, Any] = {"type": "postgresql"}
    if db_error:
        db_details["error"] = db_error
    services["database"] = ServiceHealth(
        status="healthy" if db_healthy else "unhealthy",
        latency_ms=db_latency,
        details=db_details,
    )

    if len(results) > 1:
        cache_healthy, cache_latency, cache_error = results[1]
        cache_details: dict[str, Any] = {"type": "redis", "provider": "upstash"}
        if cache_error:
            cache_details["error"] = cache_error
        services["cache"] = ServiceHealth(
            status="healthy" if cache_healthy else "degraded",
            latency_ms=cache_latency,
            details=cache_details,
        )
    else:
        services["cache"] = ServiceHealth(
            status="degraded",
            details={"type": "redis", "provider": "not configured"},
        )

    if services["database"].status == "unhealthy":
        overall_status = "unhealthy"
    elif services["cache"].status == "degraded":
        overall_status = "degraded"
    else:
        overall_status = "healthy"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        services=services,
    )


@router.get("/health/live", summary="Liveness probe")
async def liveness() -> dict[str, str]:
    """Returns 200 while the process is running."""
    return {"status": "ok", "timestamp": _now()}


@router.get("/health/ready", summary="Readiness probe")
async def readiness() -> JSONResponse:
    """Returns 503 until the database answers."""
    healthy, _, error = await _timed_health_check(check_db_health)

    if not healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": error or "database_unavailable",
                "timestamp": _now(),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "ready", "timestamp": _now()},
    )


@router.get("/health/db", summary="Database health check")
async def database_health() -> JSONResponse:
    """Database connectivity and latency."""
    healthy, latency, error = await _timed_health_check(check_db_health)

    response_data: dict[str, Any] = {
        "service": "database",
        "type": "postgresql",
        "status": "healthy" if healthy else "unhealthy",
        "latency_ms": latency,
        "timestamp": _now(),
    }
    if error:
        response_data["error"] = error

    status_code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=response_data)


@router.get("/health/cache", summary="Cache health check")
async def cache_health() -> JSONResponse:
    """Cache connectivity; always 200 because the cache is optional."""
    cache_service = get_cache_service()

    if not cache_service.is_available:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "service": "cache",
                "type": "redis",
                "provider": "not configured",
                "status": "degraded",
                "message": "Cache service is not configured",
                "timestamp": _now(),
            },
        )

    healthy, latency, error = await _timed_health_check(cache_service.check_health)

    response_data: dict[str, Any] = {
        "service": "cache",
        "type": "redis",
        "provider": "upstash",
        "status": "healthy" if healthy else "degraded",
        "latency_ms": latency,
        "timestamp": _now(),
    }
    if error:
        response_data["error"] = error

    return JSONResponse(status_code=status.HTTP_200_OK, content=response_data)
