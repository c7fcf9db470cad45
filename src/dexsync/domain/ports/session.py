"""Ports for credential acquisition, persistence and identity lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from dexsync.domain.model import Identity


@dataclass(frozen=True, slots=True)
class Credential:
    """Opaque bearer credential."""

    token: str
    expires_at: datetime | None = None


@runtime_checkable
class ConsentFlow(Protocol):
    """Obtains a fresh credential from the user; raises ``AuthorizationError`` on refusal."""

    async def __call__(self) -> Credential: ...


@runtime_checkable
class CredentialRevoker(Protocol):
    async def __call__(self, credential: Credential) -> None: ...


@runtime_checkable
class CredentialStore(Protocol):
    """Local persistence for the bearer credential."""

    def load(self) -> Credential | None: ...

    def save(self, credential: Credential) -> None: ...

    def clear(self) -> None: ...


@runtime_checkable
class IdentityProvider(Protocol):
    """Returns the verified identity behind the current credential."""

    async def __call__(self) -> Identity: ...
