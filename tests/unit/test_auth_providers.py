"""Unit tests for auth providers and the acting-user dependency.

Tests cover:
- HeaderAuthProvider (trusted gateway headers)
- LocalJWTAuthProvider (hosted-backend access tokens)
- Provider factory per auth mode
- Anonymous vs. rejected credentials in get_auth_result
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import pytest
from fastapi import HTTPException
from jose import jwt
from starlette.requests import Request

from cookbook.auth.dependencies import get_acting_user, get_auth_result
from cookbook.auth.providers import (
    ConfigurationError,
    DisabledAuthProvider,
    HeaderAuthProvider,
    LocalJWTAuthProvider,
    TokenExpiredError,
    TokenInvalidError,
    create_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from cookbook.models import ActingUser


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from cookbook.core.config import Settings


pytestmark = pytest.mark.unit

SECRET = "test-secret-key-for-unit-tests"


def _request(headers: dict[str, str] | None = None) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


def _token(claims: dict[str, Any], secret: str = SECRET) -> str:
    base = {
        "sub": "user-1",
        "email": "koch@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    return jwt.encode({**base, **claims}, secret, algorithm="HS256")


@pytest.fixture
def jwt_provider() -> LocalJWTAuthProvider:
    return LocalJWTAuthProvider(secret_key=SECRET, audience=["authenticated"])


@pytest.fixture
async def active_provider() -> AsyncGenerator[None]:
    set_auth_provider(HeaderAuthProvider())
    yield
    await shutdown_auth_provider()


class TestHeaderAuthProvider:
    """Tests for HeaderAuthProvider."""

    async def test_reads_headers(self) -> None:
        provider = HeaderAuthProvider()

        result = await provider.authenticate(
            None, _request({"X-User-ID": "user-1", "X-User-Email": "koch@example.com"})
        )

        assert result is not None
        assert result.user_id == "user-1"
        assert result.email == "koch@example.com"

    async def test_missing_header_is_anonymous(self) -> None:
        provider = HeaderAuthProvider()

        assert await provider.authenticate(None, _request()) is None
        assert await provider.authenticate(None, _request({"X-User-ID": "  "})) is None

    async def test_custom_header_names(self) -> None:
        provider = HeaderAuthProvider(user_id_header="X-Auth-User", email_header="X-Auth-Mail")

        result = await provider.authenticate(None, _request({"X-Auth-User": "u"}))

        assert result is not None
        assert result.user_id == "u"
        assert result.email is None


class TestLocalJWTAuthProvider:
    """Tests for LocalJWTAuthProvider."""

    async def test_valid_token(self, jwt_provider: LocalJWTAuthProvider) -> None:
        result = await jwt_provider.authenticate(_token({}))

        assert result is not None
        assert result.user_id == "user-1"
        assert result.email == "koch@example.com"
        assert result.raw_claims["aud"] == "authenticated"

    async def test_no_token_is_anonymous(self, jwt_provider: LocalJWTAuthProvider) -> None:
        assert await jwt_provider.authenticate(None) is None
        assert await jwt_provider.authenticate("") is None

    async def test_expired_token(self, jwt_provider: LocalJWTAuthProvider) -> None:
        with pytest.raises(TokenExpiredError):
            await jwt_provider.authenticate(_token({"exp": int(time.time()) - 10}))

    async def test_wrong_secret(self, jwt_provider: LocalJWTAuthProvider) -> None:
        with pytest.raises(TokenInvalidError):
            await jwt_provider.authenticate(_token({}, secret="other-secret"))

    async def test_wrong_audience(self, jwt_provider: LocalJWTAuthProvider) -> None:
        with pytest.raises(TokenInvalidError):
            await jwt_provider.authenticate(_token({"aud": "anon"}))

    async def test_missing_subject(self, jwt_provider: LocalJWTAuthProvider) -> None:
        with pytest.raises(TokenInvalidError, match="sub"):
            await jwt_provider.authenticate(_token({"sub": ""}))

    async def test_garbage_token(self, jwt_provider: LocalJWTAuthProvider) -> None:
        with pytest.raises(TokenInvalidError):
            await jwt_provider.authenticate("not.a.jwt")

    async def test_initialize_requires_secret(self) -> None:
        with pytest.raises(ConfigurationError):
            await LocalJWTAuthProvider(secret_key="").initialize()


class TestCreateAuthProvider:
    """Tests for create_auth_provider."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("header", HeaderAuthProvider),
            ("local_jwt", LocalJWTAuthProvider),
            ("disabled", DisabledAuthProvider),
        ],
    )
    def test_mode(self, test_settings: Settings, mode: str, expected: type) -> None:
        settings = test_settings.model_copy(
            update={"auth": test_settings.auth.model_copy(update={"mode": mode})}
        )

        assert isinstance(create_auth_provider(settings), expected)

    def test_unknown_mode(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(
            update={"auth": test_settings.auth.model_copy(update={"mode": "magic"})}
        )

        with pytest.raises(ValueError, match="Invalid auth mode"):
            create_auth_provider(settings)

    def test_production_requires_jwt_secret(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(
            update={
                "APP_ENV": "production",
                "JWT_SECRET_KEY": "",
                "auth": test_settings.auth.model_copy(update={"mode": "local_jwt"}),
            }
        )

        with pytest.raises(ConfigurationError):
            create_auth_provider(settings)

    async def test_disabled_is_always_anonymous(self) -> None:
        provider = DisabledAuthProvider()

        assert await provider.authenticate("token", _request({"X-User-ID": "u"})) is None


class TestGetAuthResult:
    """Tests for the request-level dependencies."""

    @pytest.mark.usefixtures("active_provider")
    async def test_identity_is_recorded_for_rate_limiting(self) -> None:
        request = _request({"X-User-ID": "user-1"})

        result = await get_auth_result(request, None)

        assert result is not None
        assert request.state.user_id == "user-1"
        assert await get_acting_user(result) == ActingUser(id="user-1")

    @pytest.mark.usefixtures("active_provider")
    async def test_anonymous(self) -> None:
        assert await get_auth_result(_request(), None) is None
        assert await get_acting_user(None) is None

    async def test_invalid_token_is_401(self, jwt_provider: LocalJWTAuthProvider) -> None:
        set_auth_provider(jwt_provider)
        try:
            with pytest.raises(HTTPException) as exc_info:
                await get_auth_result(_request(), "not.a.jwt")
        finally:
            await shutdown_auth_provider()

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_expired_token_is_401(self, jwt_provider: LocalJWTAuthProvider) -> None:
        set_auth_provider(jwt_provider)
        try:
            with pytest.raises(HTTPException) as exc_info:
                await get_auth_result(_request(), _token({"exp": int(time.time()) - 10}))
        finally:
            await shutdown_auth_provider()

        assert exc_info.value.detail == "Token has expired"
