from __future__ import annotations

import pytest

from dexsync.domain.identity import IdentityResolver
from dexsync.domain.reconciliation import OwnershipEngine
from dexsync.domain.session import SessionManager
from tests.support.fake_session import FakeConsentFlow, FakeRevoker, MemoryCredentialStore
from tests.support.fake_store import FakeTabularStore


@pytest.fixture
def store() -> FakeTabularStore:
    return FakeTabularStore()


@pytest.fixture
def engine(store: FakeTabularStore) -> OwnershipEngine:
    return OwnershipEngine(store)


@pytest.fixture
def resolver(store: FakeTabularStore) -> IdentityResolver:
    return IdentityResolver(store)


@pytest.fixture
def consent_flow() -> FakeConsentFlow:
    return FakeConsentFlow()


@pytest.fixture
def credential_store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def revoker() -> FakeRevoker:
    return FakeRevoker()


@pytest.fixture
def session(
    consent_flow: FakeConsentFlow,
    credential_store: MemoryCredentialStore,
    revoker: FakeRevoker,
) -> SessionManager:
    return SessionManager(
        consent_flow=consent_flow,
        credential_store=credential_store,
        revoker=revoker,
    )
