"""API module exports."""

from cms.api.deps import Content, CurrentEditor, StaffUser
from cms.api.routes import dashboard_router, health_router, projects_router, slugs_router

__all__ = [
    # Routers
    "dashboard_router",
    "health_router",
    "projects_router",
    "slugs_router",
    # Dependencies
    "Content",
    "CurrentEditor",
    "StaffUser",
]
