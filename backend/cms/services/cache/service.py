"""Main CacheService combining all cache operations."""

from cms.services.cache.content import ContentCacheMixin


class CacheService(ContentCacheMixin):
    """Async Redis caching service with graceful degradation.

    Combines all cache operations through inheritance:
    - BaseCacheOperations: get/set/invalidate facade, lifecycle, health
    - ContentCacheMixin: project listing and dashboard summary caching
    """
    pass


# Global cache service instance
_cache_service: CacheService | None = None


def get_cache_service() -> CacheService:
    """Get or create the global cache service instance."""
    global _cache_service

    if _cache_service is None:
        _cache_service = CacheService()

    return _cache_service


async def close_cache_service() -> None:
    """Close and drop the global cache service instance."""
    global _cache_service

    if _cache_service is not None:
        await _cache_service.close()
        _cache_service = None
