"""Core module exports."""

from cms.core.config import Settings, get_settings
from cms.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    SlugExhaustedError,
    ValidationError,
)
from cms.core.logging import get_logger, setup_logging
from cms.core.security import (
    create_access_token,
    decode_access_token,
    get_token_role,
    has_role,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Security
    "create_access_token",
    "decode_access_token",
    "get_token_role",
    "has_role",
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DatabaseError",
    "NotFoundError",
    "SlugExhaustedError",
    "ValidationError",
]
