from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import google.auth
import google.auth.exceptions
import pytest

from dexsync.adapters.google import ApplicationDefaultConsentFlow
from dexsync.config import GoogleAuthConfig
from dexsync.domain.errors import AuthorizationError, TransportError


class _RefreshingCredentials:
    def __init__(self, *, token: str | None, error: Exception | None = None) -> None:
        self.token: str | None = None
        self.expiry = datetime(2030, 1, 1, 12, 0)  # noqa: DTZ001
        self._token = token
        self._error = error

    def refresh(self, _request: object) -> None:
        if self._error is not None:
            raise self._error
        self.token = self._token


def _patch_default(
    monkeypatch: pytest.MonkeyPatch,
    credentials: _RefreshingCredentials,
    seen_scopes: list[list[str]] | None = None,
) -> None:
    def fake_default(scopes: list[str] | None = None) -> tuple[_RefreshingCredentials, str]:
        if seen_scopes is not None:
            seen_scopes.append(list(scopes or []))
        return credentials, "demo-project"

    monkeypatch.setattr(google.auth, "default", fake_default)


def test_consent_flow_returns_refreshed_token(monkeypatch: pytest.MonkeyPatch) -> None:
    seen_scopes: list[list[str]] = []
    _patch_default(monkeypatch, _RefreshingCredentials(token="fresh"), seen_scopes)
    config = GoogleAuthConfig(scopes=("scope-a", "scope-b"))

    credential = asyncio.run(ApplicationDefaultConsentFlow(config)())

    assert credential.token == "fresh"
    assert credential.expires_at == datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
    assert seen_scopes == [["scope-a", "scope-b"]]


def test_missing_default_credentials_is_an_authorization_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_default(scopes: list[str] | None = None) -> tuple[object, str]:
        raise google.auth.exceptions.DefaultCredentialsError("no ADC configured")

    monkeypatch.setattr(google.auth, "default", fake_default)

    with pytest.raises(AuthorizationError, match="no ADC configured"):
        asyncio.run(ApplicationDefaultConsentFlow(GoogleAuthConfig())())


def test_network_failure_during_refresh_is_a_transport_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    error = google.auth.exceptions.TransportError("dns failure")
    _patch_default(monkeypatch, _RefreshingCredentials(token="unused", error=error))

    with pytest.raises(TransportError, match="dns failure"):
        asyncio.run(ApplicationDefaultConsentFlow(GoogleAuthConfig())())


def test_refresh_without_token_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_default(monkeypatch, _RefreshingCredentials(token=None))

    with pytest.raises(AuthorizationError, match="did not yield"):
        asyncio.run(ApplicationDefaultConsentFlow(GoogleAuthConfig())())
