"""Unit tests for auth module."""

from unittest.mock import patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt
from pydantic import SecretStr

from jobly.core.auth import (
    AuthenticatedUser,
    TokenPayload,
    _create_bypass_user,
    create_access_token,
    get_current_user,
    require_admin,
    verify_token,
)
from jobly.core.config import AppConfig, AuthConfig, SecurityConfig, Settings
from jobly.core.errors import UnauthorizedError


@pytest.fixture
def strict_settings():
    """Settings with JWT validation enabled and a known secret."""
    settings = Settings(
        app=AppConfig(env="test"),
        auth=AuthConfig(secret_key=SecretStr("test-secret")),
        security=SecurityConfig(skip_jwt_validation=False),
    )
    with patch("jobly.core.auth.get_settings", return_value=settings):
        yield settings


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_payload_reads_is_admin_alias():
    payload = TokenPayload.model_validate({"username": "u1", "isAdmin": True})
    assert payload.is_admin is True


def test_create_bypass_user():
    user = _create_bypass_user()
    assert user.username == "local-dev-user"
    assert user.is_admin is True


def test_create_and_verify_token_roundtrip(strict_settings):
    token = create_access_token("u4", is_admin=True)

    payload = verify_token(token)

    assert payload.username == "u4"
    assert payload.is_admin is True


def test_create_token_sets_expiry_when_ttl_configured(strict_settings):
    strict_settings.auth.token_ttl_seconds = 60

    claims = jwt.get_unverified_claims(create_access_token("u1"))

    assert "exp" in claims
    assert claims["isAdmin"] is False


def test_verify_token_rejects_wrong_signature(strict_settings):
    token = jwt.encode({"username": "u1", "isAdmin": True}, "other-secret", algorithm="HS256")

    with pytest.raises(UnauthorizedError):
        verify_token(token)


def test_verify_token_rejects_payload_without_username(strict_settings):
    token = jwt.encode({"isAdmin": True}, "test-secret", algorithm="HS256")

    with pytest.raises(UnauthorizedError):
        verify_token(token)


@pytest.mark.asyncio
async def test_get_current_user_requires_credentials(strict_settings):
    with pytest.raises(UnauthorizedError, match="Missing authorization header"):
        await get_current_user(None)


@pytest.mark.asyncio
async def test_get_current_user_from_token(strict_settings):
    token = create_access_token("u1", is_admin=False)

    user = await get_current_user(_bearer(token))

    assert user == AuthenticatedUser(username="u1", is_admin=False)


@pytest.mark.asyncio
async def test_get_current_user_bypass_in_local():
    user = await get_current_user(None)
    assert user.username == "local-dev-user"


def test_require_admin_rejects_regular_user():
    with pytest.raises(UnauthorizedError):
        require_admin(AuthenticatedUser(username="u1", is_admin=False))


def test_require_admin_accepts_admin():
    admin = AuthenticatedUser(username="u4", is_admin=True)
    assert require_admin(admin) is admin
