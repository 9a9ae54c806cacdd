"""API dependencies for FastAPI routes."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cms.core.config import get_settings
from cms.core.exceptions import AuthenticationError, AuthorizationError
from cms.core.security import decode_access_token, get_token_role, has_role
from cms.db.session import get_db
from cms.services.cache import CacheService, get_cache_service
from cms.services.content import ContentService

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class StaffUser:
    """Dashboard user resolved from a verified access token."""

    id: str
    role: str
    email: str | None = None


async def get_current_editor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> StaffUser:
    """Resolve the dashboard user and require the content editor role.

    Raises:
        AuthenticationError: If the token is missing, invalid or has no subject
        AuthorizationError: If the role ranks below the editor role
    """
    if not credentials:
        raise AuthenticationError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    role = get_token_role(payload)
    if not has_role(role, get_settings().content_editor_role):
        raise AuthorizationError("Content editor role required")

    return StaffUser(id=str(user_id), role=role or "", email=payload.get("email"))


def get_content_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheService, Depends(get_cache_service)],
) -> ContentService:
    """Build the content service for this request's session."""
    return ContentService(db, cache)


# Type aliases for cleaner route signatures
CurrentEditor = Annotated[StaffUser, Depends(get_current_editor)]
Content = Annotated[ContentService, Depends(get_content_service)]
