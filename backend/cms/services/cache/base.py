"""Base cache operations - lazy Redis client with graceful degradation."""

import asyncio
from typing import Any

import orjson
from upstash_redis.asyncio import Redis

from cms.core.config import get_settings
from cms.core.logging import get_logger

logger = get_logger(__name__)


class BaseCacheOperations:
    """Get/set/invalidate over Redis that never raises to the caller.

    The client is created on first use. When no Redis credentials are
    configured the service stays in pass-through mode for the rest of the
    process: every read misses and every write reports ``False``.
    """

    def __init__(self) -> None:
        """Initialize the cache service without connecting."""
        self._client: Redis | None = None
        self._initialized = False

    def _get_client(self) -> Redis | None:
        """Create the Redis client once, on first use."""
        if self._initialized:
            return self._client

        self._initialized = True
        settings = get_settings()

        if settings.redis_available:
            try:
                self._client = Redis(
                    url=settings.upstash_redis_rest_url,
                    token=settings.upstash_redis_rest_token,
                )
                logger.info("Redis cache initialized")
            except Exception as e:
                logger.warning("Failed to initialize Redis cache", error=str(e))
                self._client = None
        else:
            logger.info("Redis cache not configured, caching disabled")

        return self._client

    @property
    def is_initialized(self) -> bool:
        """Whether the first-use initialization has run."""
        return self._initialized

    @property
    def is_available(self) -> bool:
        """Check if cache is available (initializes on first call)."""
        return self._get_client() is not None

    def _make_key(self, prefix: str, *parts: str | int) -> str:
        """Create a cache key from prefix and parts."""
        return f"{prefix}:{':'.join(str(p) for p in parts)}"

    # ========== Facade ==========

    async def get_cached(self, key: str) -> Any | None:
        """Return the deserialized value for ``key`` or None on any miss."""
        client = self._get_client()
        if client is None:
            return None

        try:
            raw = await client.get(key)
        except Exception as e:
            logger.warning("Cache get failed", key=key, error=str(e))
            return None

        if not raw:
            return None

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Cache payload decode failed", key=key)
            return None

    async def set_cached(
        self,
        key: str,
        value: Any,
        ttl_seconds: int | None = None,
    ) -> bool:
        """Serialize ``value`` and store it under ``key`` with an expiry.

        A TTL of zero or less invalidates the key instead of writing it.
        """
        if ttl_seconds is None:
            ttl_seconds = get_settings().cache_default_ttl

        if ttl_seconds <= 0:
            return await self.invalidate(key)

        client = self._get_client()
        if client is None:
            return False

        try:
            payload = orjson.dumps(value).decode()
        except TypeError as e:
            logger.warning("Cache payload encode failed", key=key, error=str(e))
            return False

        try:
            await client.set(key, payload, ex=ttl_seconds)
            return True
        except Exception as e:
            logger.warning("Cache set failed", key=key, error=str(e))
            return False

    async def invalidate(self, key: str, *keys: str) -> bool:
        """Delete one or more keys."""
        client = self._get_client()
        if client is None:
            return False

        try:
            await client.delete(key, *keys)
            return True
        except Exception as e:
            logger.warning("Cache invalidate failed", keys=[key, *keys], error=str(e))
            return False

    # ========== Lifecycle ==========

    async def close(self) -> None:
        """Close the client and return to the uninitialized state."""
        client = self._client
        self._client = None
        self._initialized = False

        if client is None:
            return

        try:
            await client.close()
            logger.info("Redis cache connection closed")
        except Exception as e:
            logger.warning("Failed to close Redis cache", error=str(e))

    # ========== Health check ==========

    async def check_health(self, timeout: float = 5.0) -> bool:
        """Check Redis connectivity with timeout."""
        client = self._get_client()
        if client is None:
            return False

        try:
            result = await asyncio.wait_for(client.ping(), timeout=timeout)
            return bool(result)
        except asyncio.TimeoutError:
            logger.error("Redis health check timed out", timeout=timeout)
            return False
        except Exception as e:
            logger.error("Redis health check failed", error=str(e))
            return False
