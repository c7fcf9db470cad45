"""Bearer credential lifecycle and the retry-once policy for expired sessions."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from dexsync.domain.errors import AuthorizationError, DexSyncError, SessionExpiredError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from dexsync.domain.model import Row
    from dexsync.domain.ports.session import (
        ConsentFlow,
        Credential,
        CredentialRevoker,
        CredentialStore,
    )
    from dexsync.domain.ports.store import CellRange, TableSchema, TabularStore

log = getLogger(__name__)

T = TypeVar("T")


class SessionState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"


@dataclass(slots=True)
class SessionManager:
    """Owns the bearer credential.

    Expiry is detected reactively: a store call rejected with
    ``AuthorizationError`` drops the credential, runs the consent flow again
    and retries the call once. A second rejection raises
    ``SessionExpiredError``.
    """

    consent_flow: ConsentFlow
    credential_store: CredentialStore
    revoker: CredentialRevoker | None = None
    _credential: Credential | None = field(default=None, init=False, repr=False)
    _state: SessionState = field(default=SessionState.UNAUTHENTICATED, init=False)
    _consent_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def bearer_token(self) -> str | None:
        return self._credential.token if self._credential is not None else None

    def is_authenticated(self) -> bool:
        """True while a credential is held; says nothing about remote validity."""
        return self._credential is not None

    async def acquire(self) -> Credential:
        """Adopt the persisted credential if there is one, otherwise run the consent flow."""

        if self._credential is not None:
            return self._credential

        async with self._consent_lock:
            # Another caller may have finished a consent flow while we waited.
            if self._credential is not None:
                return self._credential

            persisted = self.credential_store.load()
            if persisted is not None:
                log.debug("Adopting persisted credential without validation")
                self._credential = persisted
                self._state = SessionState.AUTHENTICATED
                return persisted

            return await self._run_consent_flow()

    async def revoke(self) -> None:
        """Revoke remotely (best effort), then forget the credential in any case."""

        credential = self._credential or self.credential_store.load()
        try:
            if credential is not None and self.revoker is not None:
                await self.revoker(credential)
                log.info("Revoked credential")
        except DexSyncError as exc:
            log.warning(f"Credential revocation failed, signing out locally: {exc}")
        finally:
            self._forget()
            self._state = SessionState.UNAUTHENTICATED

    async def authorized(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` with a held credential, re-acquiring once on rejection."""

        stale = await self.acquire()
        try:
            return await operation()
        except SessionExpiredError:
            raise
        except AuthorizationError as exc:
            log.warning(f"Credential rejected ({exc}); re-acquiring")

        await self._reacquire(stale)
        try:
            return await operation()
        except AuthorizationError as exc:
            self._forget()
            self._state = SessionState.EXPIRED
            log.error(f"Re-acquired credential rejected as well: {exc}")
            raise SessionExpiredError(f"Session expired: {exc}") from exc

    async def _reacquire(self, stale: Credential) -> None:
        async with self._consent_lock:
            if self._credential is not None and self._credential != stale:
                # A concurrent caller already replaced the rejected credential.
                return
            self._forget()
            self._state = SessionState.EXPIRED
            await self._run_consent_flow()

    async def _run_consent_flow(self) -> Credential:
        self._state = SessionState.AUTHENTICATING
        try:
            credential = await self.consent_flow()
        except BaseException:
            self._state = SessionState.UNAUTHENTICATED
            raise
        self.credential_store.save(credential)
        self._credential = credential
        self._state = SessionState.AUTHENTICATED
        log.info("Acquired a fresh credential")
        return credential

    def _forget(self) -> None:
        self._credential = None
        self.credential_store.clear()


@dataclass(slots=True)
class AuthorizedStore:
    """``TabularStore`` whose calls run under the session's retry-once policy."""

    store: TabularStore
    session: SessionManager

    async def read_range(self, table: TableSchema, cell_range: CellRange) -> list[Row]:
        return await self.session.authorized(lambda: self.store.read_range(table, cell_range))

    async def append_row(self, table: TableSchema, row: Row) -> None:
        await self.session.authorized(lambda: self.store.append_row(table, row))

    async def append_rows(self, table: TableSchema, rows: Sequence[Row]) -> None:
        await self.session.authorized(lambda: self.store.append_rows(table, rows))

    async def update_range(
        self,
        table: TableSchema,
        cell_range: CellRange,
        rows: Sequence[Row],
    ) -> None:
        await self.session.authorized(lambda: self.store.update_range(table, cell_range, rows))

    async def clear_range(self, table: TableSchema, cell_range: CellRange) -> None:
        await self.session.authorized(lambda: self.store.clear_range(table, cell_range))
