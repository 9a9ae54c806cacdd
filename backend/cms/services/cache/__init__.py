"""Async Redis caching service using Upstash.

Fronts expensive read paths with a cache-aside facade:
- get_cached: deserialized value or None (missing, expired, unavailable)
- set_cached: store with TTL, never raises
- invalidate: explicit delete of one or more keys

Runs in pass-through mode when Redis is not configured.
"""

from cms.services.cache.constants import (
    KEY_PREFIX_DASHBOARD,
    KEY_PREFIX_PROJECTS,
    TTL_DASHBOARD_SUMMARY,
    TTL_PROJECTS_LIST,
)
from cms.services.cache.service import (
    CacheService,
    close_cache_service,
    get_cache_service,
)

__all__ = [
    # TTL constants
    "TTL_PROJECTS_LIST",
    "TTL_DASHBOARD_SUMMARY",
    # Key prefix constants
    "KEY_PREFIX_PROJECTS",
    "KEY_PREFIX_DASHBOARD",
    # Service
    "CacheService",
    "close_cache_service",
    "get_cache_service",
]
