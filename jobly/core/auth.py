"""JWT token verification and authentication dependencies."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field

from jobly.core.config import AppEnvironment, get_settings
from jobly.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

INVALID_OR_EXPIRED_TOKEN_MSG = "Invalid or expired token"

_optional_security = HTTPBearer(auto_error=False)


class TokenPayload(BaseModel):
    """JWT token payload."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    is_admin: bool = Field(default=False, alias="isAdmin")
    exp: int | None = None


class AuthenticatedUser(BaseModel):
    """Authenticated user information."""

    username: str
    is_admin: bool = False


def create_access_token(username: str, is_admin: bool = False) -> str:
    """Sign a token for `username` with the configured secret."""
    settings = get_settings()
    claims: dict[str, Any] = {"username": username, "isAdmin": is_admin}
    if settings.auth.token_ttl_seconds:
        expires_at = datetime.now(UTC) + timedelta(seconds=settings.auth.token_ttl_seconds)
        claims["exp"] = int(expires_at.timestamp())
    return jwt.encode(
        claims,
        settings.auth.secret_key.get_secret_value(),
        algorithm=settings.auth.algorithm,
    )


def verify_token(token: str) -> TokenPayload:
    """Verify signature and expiry, returning the decoded payload."""
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.auth.secret_key.get_secret_value(),
            algorithms=[settings.auth.algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e

    try:
        return TokenPayload.model_validate(claims)
    except ValueError as e:
        raise UnauthorizedError(INVALID_OR_EXPIRED_TOKEN_MSG) from e


def _create_bypass_user() -> AuthenticatedUser:
    """Create mock admin for local development."""
    return AuthenticatedUser(username="local-dev-user", is_admin=True)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_optional_security),
) -> AuthenticatedUser:
    """Extract and verify the bearer token, returning the caller."""
    settings = get_settings()

    if settings.security.skip_jwt_validation:
        if settings.app.env != AppEnvironment.LOCAL:
            logger.error(
                "Refusing JWT bypass outside local environment",
                extra={"app_env": settings.app.env.value},
            )
            raise UnauthorizedError("JWT bypass is only allowed in local environment")
        logger.info("JWT validation bypassed - returning mock user")
        return _create_bypass_user()

    if credentials is None:
        raise UnauthorizedError("Missing authorization header")

    payload = verify_token(credentials.credentials)
    return AuthenticatedUser(username=payload.username, is_admin=payload.is_admin)


def require_admin(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
    if not user.is_admin:
        logger.warning(f"Access denied - user {user.username} is not an admin")
        raise UnauthorizedError("Admin privileges required")
    return user


RequireAdmin = Annotated[AuthenticatedUser, Depends(require_admin)]
