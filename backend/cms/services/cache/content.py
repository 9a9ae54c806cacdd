"""Listing caches for the public site and the dashboard."""

from typing import Any

from cms.services.cache.base import BaseCacheOperations
from cms.services.cache.constants import (
    KEY_PREFIX_DASHBOARD,
    KEY_PREFIX_PROJECTS,
    TTL_DASHBOARD_SUMMARY,
    TTL_PROJECTS_LIST,
)


class ContentCacheMixin(BaseCacheOperations):
    """Cache-aside helpers for content listings."""

    @property
    def projects_list_key(self) -> str:
        return self._make_key(KEY_PREFIX_PROJECTS, "list")

    @property
    def dashboard_summary_key(self) -> str:
        return self._make_key(KEY_PREFIX_DASHBOARD, "summary")

    async def get_projects_list(self) -> list[dict[str, Any]] | None:
        """Get the cached active project listing."""
        data = await self.get_cached(self.projects_list_key)
        return data if isinstance(data, list) else None

    async def set_projects_list(self, projects: list[dict[str, Any]]) -> bool:
        """Cache the active project listing."""
        return await self.set_cached(self.projects_list_key, projects, TTL_PROJECTS_LIST)

    async def get_dashboard_summary(self) -> dict[str, Any] | None:
        """Get cached dashboard counters."""
        data = await self.get_cached(self.dashboard_summary_key)
        return data if isinstance(data, dict) else None

    async def set_dashboard_summary(self, summary: dict[str, Any]) -> bool:
        """Cache dashboard counters."""
        return await self.set_cached(self.dashboard_summary_key, summary, TTL_DASHBOARD_SUMMARY)

    async def invalidate_content_listings(self) -> bool:
        """Drop every listing that a content write can make stale."""
        return await self.invalidate(self.projects_list_key, self.dashboard_summary_key)
