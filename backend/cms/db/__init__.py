"""Database module exports."""

from cms.db.models import (
    Base,
    BlogPost,
    CareerCategory,
    CareerPosition,
    Category,
    Partner,
    Project,
    SluggedContent,
)
from cms.db.session import (
    check_db_health,
    close_db,
    get_db,
    get_db_context,
    get_engine,
    get_session_factory,
    init_db,
)

__all__ = [
    # Models
    "Base",
    "SluggedContent",
    "Project",
    "BlogPost",
    "CareerPosition",
    "Category",
    "CareerCategory",
    "Partner",
    # Session management
    "get_db",
    "get_db_context",
    "get_engine",
    "get_session_factory",
    "init_db",
    "close_db",
    "check_db_health",
]
