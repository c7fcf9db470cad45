"""Application composition root and the client-side ownership caches."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from dexsync.adapters.credential_store import FileCredentialStore
from dexsync.adapters.google import (
    ApplicationDefaultConsentFlow,
    GoogleCredentialRevoker,
    GoogleUserInfoClient,
)
from dexsync.adapters.sheets import SheetsStoreClient
from dexsync.config import get_google_auth_config, get_sheets_config, get_storage_config
from dexsync.domain.catalog import CatalogReader
from dexsync.domain.errors import DexSyncError
from dexsync.domain.identity import IdentityResolver
from dexsync.domain.reconciliation import OwnershipCache, OwnershipEngine
from dexsync.domain.session import AuthorizedStore, SessionManager

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from dexsync.config import GoogleAuthConfig, SheetsConfig, StorageConfig
    from dexsync.domain.model import CatalogItem, OwnershipRecord, User
    from dexsync.domain.ports.session import ConsentFlow, IdentityProvider

log = getLogger(__name__)


class NotSignedInError(DexSyncError):
    """Raised when a per-user operation runs before ``sign_in``."""


@dataclass(slots=True)
class DexSyncApp:
    """Signed-in client state: reference data plus the per-user and all-users caches.

    Both caches change only after the remote write is confirmed, and always
    together.
    """

    session: SessionManager
    identity_provider: IdentityProvider
    resolver: IdentityResolver
    engine: OwnershipEngine
    catalog: CatalogReader
    current_user: User | None = None
    catalog_items: list[CatalogItem] = field(default_factory=list["CatalogItem"])
    users: list[User] = field(default_factory=list["User"])
    user_cache: OwnershipCache = field(default_factory=OwnershipCache)
    all_cache: OwnershipCache = field(default_factory=OwnershipCache)

    async def sign_in(self) -> User:
        await self.session.acquire()
        identity = await self.session.authorized(self.identity_provider)
        self.current_user = await self.resolver.resolve_current_user(identity)
        log.info(f"Signed in as {self.current_user.display_name} ({self.current_user.id})")
        await self.reload()
        return self.current_user

    async def reload(self) -> None:
        """Replace reference data and both caches with a fresh read of the store."""

        items, users, records = await asyncio.gather(
            self.catalog.list_items(),
            self.resolver.list_users(),
            self.engine.get_all_slice(),
        )
        self.catalog_items = items
        self.users = users
        self.all_cache.replace_all(records)
        user_id = self.current_user.id if self.current_user is not None else None
        self.user_cache.replace_all(record for record in records if record.user_id == user_id)
        log.debug(f"Loaded {len(items)} items, {len(users)} users, {len(records)} records")

    async def set_not_owned(self, item_id: str, not_owned: bool) -> OwnershipRecord:
        user = self._require_user()
        record = await self.engine.set_not_owned(item_id, user.id, not_owned)
        self._reconcile(record)
        return record

    async def set_tradeable(self, item_id: str, tradeable: bool) -> OwnershipRecord:
        user = self._require_user()
        record = await self.engine.set_tradeable(item_id, user.id, tradeable)
        self._reconcile(record)
        return record

    def ownership(self, item_id: str) -> OwnershipRecord:
        user = self._require_user()
        return self.user_cache.get(item_id, user.id)

    async def sign_out(self) -> None:
        await self.session.revoke()
        self.current_user = None
        self.catalog_items = []
        self.users = []
        self.user_cache.clear()
        self.all_cache.clear()

    def _reconcile(self, record: OwnershipRecord) -> None:
        self.all_cache.apply(record)
        if self.current_user is not None and record.user_id == self.current_user.id:
            self.user_cache.apply(record)

    def _require_user(self) -> User:
        if self.current_user is None:
            raise NotSignedInError("Sign in before changing ownership")
        return self.current_user


@asynccontextmanager
async def open_app(
    *,
    sheets_config: SheetsConfig | None = None,
    google_config: GoogleAuthConfig | None = None,
    storage_config: StorageConfig | None = None,
    consent_flow: ConsentFlow | None = None,
) -> AsyncIterator[DexSyncApp]:
    """Wire one store client, session, resolver and engine; close the client on exit."""

    effective_sheets = sheets_config or get_sheets_config()
    effective_google = google_config or get_google_auth_config()
    effective_storage = storage_config or get_storage_config()

    session = SessionManager(
        consent_flow=consent_flow or ApplicationDefaultConsentFlow(effective_google),
        credential_store=FileCredentialStore(effective_storage.credential_path()),
        revoker=GoogleCredentialRevoker(effective_google),
    )
    async with SheetsStoreClient(
        config=effective_sheets,
        token_source=session.bearer_token,
    ) as raw_store:
        store = AuthorizedStore(store=raw_store, session=session)
        yield DexSyncApp(
            session=session,
            identity_provider=GoogleUserInfoClient(
                config=effective_google,
                token_source=session.bearer_token,
            ),
            resolver=IdentityResolver(store),
            engine=OwnershipEngine(store),
            catalog=CatalogReader(store),
        )
