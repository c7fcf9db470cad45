"""Upsert-or-delete toggles against the Ownership table.

The engine keeps no state between calls: every toggle starts from a fresh
read of the table and returns the canonical record that now stands for the
key, so callers can merge it into their caches without another full read.

A row that would carry the implicit default (owned, not tradeable) is never
written; reaching that state deletes the row instead. The store cannot
delete rows, so a delete re-reads the table, clears the whole range and
appends the survivors back. Appends land after the last non-empty row, so
another client's append that arrives after the clear survives the rewrite
and shows up in the verification read as a ``ConsistencyWarning``. Only a
write landing between the re-read and the clear itself is lost unseen.
"""

from __future__ import annotations

import warnings
from collections import Counter
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from dexsync.domain.errors import ConsistencyWarning, DexSyncError
from dexsync.domain.model import OwnershipKey, OwnershipRecord, format_flag
from dexsync.domain.model.cells import cell
from dexsync.domain.tables import OWNERSHIP, is_blank_row, ownership_from_row, ownership_to_row

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from dexsync.domain.model import Row
    from dexsync.domain.ports.store import TabularStore

log = getLogger(__name__)


def _row_key(row: Sequence[object]) -> OwnershipKey:
    return OwnershipKey(cell(row, 0), cell(row, 1))


def _is_record_row(row: Sequence[object]) -> bool:
    key = _row_key(row)
    return bool(key.item_id and key.user_id)


def _warn(message: str) -> None:
    log.warning(message)
    warnings.warn(message, ConsistencyWarning, stacklevel=3)


@dataclass(slots=True)
class OwnershipEngine:
    store: TabularStore

    async def get_user_slice(self, user_id: str) -> list[OwnershipRecord]:
        return [record for record in await self.get_all_slice() if record.user_id == user_id]

    async def get_all_slice(self) -> list[OwnershipRecord]:
        rows = await self._read_rows()
        return [ownership_from_row(row) for row in rows if _is_record_row(row)]

    async def set_not_owned(self, item_id: str, user_id: str, not_owned: bool) -> OwnershipRecord:
        """Mark an item (not) owned; the resulting record never carries a trade offer."""

        target = OwnershipRecord(item_id=item_id, user_id=user_id, not_owned=not_owned)
        rows = await self._read_rows()
        located = self._locate(rows, target.key)

        if target.is_default:
            if located:
                await self._delete(rows, target.key)
                log.info(f"Removed ownership row for {target.key}")
            return target

        if not located:
            await self.store.append_row(OWNERSHIP, ownership_to_row(target))
            log.info(f"Recorded {target.key} as not owned")
            return target

        await self.store.update_range(
            OWNERSHIP,
            OWNERSHIP.row_range(located[0]),
            [ownership_to_row(target)],
        )
        log.info(f"Overwrote ownership row for {target.key}: not_owned={not_owned}")
        return target

    async def set_tradeable(self, item_id: str, user_id: str, tradeable: bool) -> OwnershipRecord:
        default = OwnershipRecord.default(item_id, user_id)
        rows = await self._read_rows()
        located = self._locate(rows, default.key)

        if not located:
            if not tradeable:
                return default
            record = default.with_flags(tradeable=True)
            await self.store.append_row(OWNERSHIP, ownership_to_row(record))
            log.info(f"Offered {record.key} for trade")
            return record

        updated = ownership_from_row(rows[located[0]]).with_flags(tradeable=tradeable)
        if updated.is_default:
            await self._delete(rows, default.key)
            log.info(f"Removed ownership row for {default.key}")
            return default

        await self.store.update_range(
            OWNERSHIP,
            OWNERSHIP.cell_range("tradeable", located[0]),
            [[format_flag(tradeable)]],
        )
        log.info(f"Set tradeable={tradeable} for {updated.key}")
        return updated

    async def _read_rows(self) -> list[Row]:
        return await self.store.read_range(OWNERSHIP, OWNERSHIP.data_range())

    def _locate(self, rows: Sequence[Row], key: OwnershipKey) -> list[int]:
        located = [
            index
            for index, row in enumerate(rows)
            if not is_blank_row(row) and _row_key(row) == key
        ]
        if len(located) > 1:
            _warn(f"Ownership table holds {len(located)} rows for {key}; using the first")
        return located

    async def _delete(self, rows: Sequence[Row], key: OwnershipKey) -> None:
        current = await self._read_rows()
        if _key_counts(current) != _key_counts(rows):
            _warn(f"Ownership table changed before deleting {key}; keeping the concurrent rows")
        remaining = [row for row in current if not is_blank_row(row) and _row_key(row) != key]

        await self.store.clear_range(OWNERSHIP, OWNERSHIP.data_range())
        if remaining:
            try:
                await self.store.append_rows(OWNERSHIP, remaining)
            except DexSyncError:
                log.exception(
                    f"Ownership range was cleared but {len(remaining)} rows were not rewritten"
                )
                raise

        # The delete has already landed.
        try:
            rewritten = await self._read_rows()
        except DexSyncError as exc:
            _warn(f"Could not verify deleting {key}: {exc}")
            return
        if _key_counts(rewritten) != _key_counts(remaining):
            _warn(f"Ownership table changed while deleting {key}; reload to see the winning state")


def _key_counts(rows: Iterable[Row]) -> Counter[OwnershipKey]:
    return Counter(_row_key(row) for row in rows if not is_blank_row(row))
