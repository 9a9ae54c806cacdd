"""JWT verification for tokens issued by the hosted auth platform.

Access tokens are minted by the platform and signed with the project's
shared secret; this service only verifies them and reads the role claim.
``create_access_token`` exists for local tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from cms.core.config import get_settings

# Higher rank includes every permission of lower ranks
ROLE_HIERARCHY: dict[str, int] = {
    "admin": 3,
    "editor": 2,
    "hr": 1,
}


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token shaped like the platform's.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))

    to_encode.setdefault("aud", settings.jwt_audience)
    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
    })

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded payload if valid, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
        return payload
    except JWTError:
        return None


def get_token_role(payload: dict[str, Any]) -> str | None:
    """Read the dashboard role from a decoded token.

    The platform keeps custom roles in ``app_metadata``; the top-level
    ``role`` claim is only used when that is absent.
    """
    app_metadata = payload.get("app_metadata")
    if isinstance(app_metadata, dict) and app_metadata.get("role"):
        return str(app_metadata["role"])
    role = payload.get("role")
    return str(role) if role else None


def has_role(role: str | None, required_role: str) -> bool:
    """Check whether ``role`` ranks at or above ``required_role``."""
    if role is None or role not in ROLE_HIERARCHY:
        return False
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[required_role]
