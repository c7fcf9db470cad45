from __future__ import annotations

import asyncio
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from dexsync.adapters.google import GoogleCredentialRevoker, GoogleUserInfoClient
from dexsync.adapters.http_resilience import ResilientClient
from dexsync.config import GoogleAuthConfig, ResilienceConfig
from dexsync.config.google import GOOGLE_REVOKE_URL
from dexsync.domain.errors import AuthorizationError, TransportError
from dexsync.domain.model import Identity
from dexsync.domain.ports.session import Credential


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    return factory


def _userinfo(
    handler: Callable[[httpx.Request], httpx.Response],
    token: str | None = "access-token",
) -> GoogleUserInfoClient:
    return GoogleUserInfoClient(
        config=GoogleAuthConfig(),
        token_source=lambda: token,
        client_factory=_make_client_factory(handler),
    )


def test_userinfo_returns_identity_with_profile_name() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"id": "42", "email": "ash@example.com", "name": "Ash Ketchum", "picture": "x"},
        )

    identity = asyncio.run(_userinfo(handler)())

    assert identity == Identity(email="ash@example.com", display_name="Ash Ketchum")
    assert seen[0].headers["Authorization"] == "Bearer access-token"
    assert seen[0].url.path == "/oauth2/v2/userinfo"


def test_userinfo_falls_back_to_email_for_display_name() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"email": "misty@example.com"})

    identity = asyncio.run(_userinfo(handler)())

    assert identity.display_name == "misty@example.com"


def test_userinfo_rejects_blank_email() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"email": "  ", "name": "Nobody"})

    with pytest.raises(TransportError, match="unexpected response payload"):
        asyncio.run(_userinfo(handler)())


def test_userinfo_maps_401_to_authorization_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"code": 401, "message": "expired"}})

    with pytest.raises(AuthorizationError, match="expired"):
        asyncio.run(_userinfo(handler)())


def test_userinfo_without_token_sends_nothing() -> None:
    calls = 0

    def handler(_: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={"email": "ash@example.com"})

    with pytest.raises(AuthorizationError):
        asyncio.run(_userinfo(handler, token=None)())

    assert calls == 0


def test_revoker_posts_token_form() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    revoker = GoogleCredentialRevoker(
        config=GoogleAuthConfig(),
        client_factory=_make_client_factory(handler),
    )
    asyncio.run(revoker(Credential(token="access-token")))

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == GOOGLE_REVOKE_URL
    assert parse_qs(request.content.decode()) == {"token": ["access-token"]}


def test_revoker_surfaces_rejection_as_transport_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": "invalid_token"}})

    revoker = GoogleCredentialRevoker(
        config=GoogleAuthConfig(),
        client_factory=_make_client_factory(handler),
    )

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(revoker(Credential(token="gone")))

    assert excinfo.value.status_code == 400
