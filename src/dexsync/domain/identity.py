"""Bind a verified external identity to a durable User row."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from dexsync.domain.errors import ConsistencyWarning
from dexsync.domain.model import User
from dexsync.domain.tables import USERS, is_blank_row, user_from_row, user_to_row

if TYPE_CHECKING:
    from dexsync.domain.model import Identity, Row
    from dexsync.domain.ports.store import TabularStore

log = getLogger(__name__)


def synthesize_user_id(existing_rows: int) -> str:
    return f"user{existing_rows + 1}"


@dataclass(slots=True)
class IdentityResolver:
    """Find-or-create users keyed by email.

    Two clients signing in the same new email at the same time can both miss
    the lookup and both append; such duplicates are reported with a
    ``ConsistencyWarning`` on later lookups and the first row wins.
    """

    store: TabularStore

    async def list_users(self) -> list[User]:
        rows = await self.store.read_range(USERS, USERS.data_range())
        return [user_from_row(row) for row in rows if not is_blank_row(row)]

    async def resolve_current_user(self, identity: Identity) -> User:
        rows = await self.store.read_range(USERS, USERS.data_range())
        matches = _rows_for_email(rows, identity.email)

        if not matches:
            user = User(
                id=synthesize_user_id(len(rows)),
                display_name=identity.display_name,
                email=identity.email,
            )
            await self.store.append_row(USERS, user_to_row(user))
            log.info(f"Registered new user {user.id} for {user.email}")
            return user

        if len(matches) > 1:
            ids = ", ".join(user_from_row(rows[index]).id for index in matches)
            message = f"Email {identity.email} is registered more than once ({ids})"
            log.warning(message)
            warnings.warn(message, ConsistencyWarning, stacklevel=2)

        index = matches[0]
        user = user_from_row(rows[index])
        if user.display_name == identity.display_name:
            return user

        await self.store.update_range(
            USERS,
            USERS.cell_range("display_name", index),
            [[identity.display_name]],
        )
        log.info(f"Renamed {user.id}: {user.display_name!r} -> {identity.display_name!r}")
        return user.renamed(identity.display_name)


def _rows_for_email(rows: list[Row], email: str) -> list[int]:
    return [
        index
        for index, row in enumerate(rows)
        if not is_blank_row(row) and user_from_row(row).email == email
    ]
