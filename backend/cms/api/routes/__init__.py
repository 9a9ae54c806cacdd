"""Routes module exports."""

from cms.api.routes.dashboard import router as dashboard_router
from cms.api.routes.health import router as health_router
from cms.api.routes.projects import router as projects_router
from cms.api.routes.slugs import router as slugs_router

__all__ = [
    "dashboard_router",
    "health_router",
    "projects_router",
    "slugs_router",
]
