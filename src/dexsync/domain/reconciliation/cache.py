"""In-memory views of the Ownership table kept by the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dexsync.domain.model import OwnershipKey, OwnershipRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(slots=True)
class OwnershipCache:
    """Records by composite key; an absent key reads as the implicit default."""

    _records: dict[OwnershipKey, OwnershipRecord] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: Iterable[OwnershipRecord]) -> OwnershipCache:
        cache = cls()
        cache.replace_all(records)
        return cache

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OwnershipRecord]:
        return iter(self._records.values())

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def replace_all(self, records: Iterable[OwnershipRecord]) -> None:
        """Swap in a freshly loaded slice; the last load wins."""
        self._records = {}
        for record in records:
            self.apply(record)

    def apply(self, record: OwnershipRecord) -> None:
        """Merge one confirmed record: replace-or-insert, or drop it when it is the default."""
        if record.is_default:
            self._records.pop(record.key, None)
        else:
            self._records[record.key] = record

    def get(self, item_id: str, user_id: str) -> OwnershipRecord:
        key = OwnershipKey(item_id, user_id)
        return self._records.get(key) or OwnershipRecord.default(item_id, user_id)

    def for_item(self, item_id: str) -> list[OwnershipRecord]:
        return [record for record in self._records.values() if record.item_id == item_id]

    def for_user(self, user_id: str) -> list[OwnershipRecord]:
        return [record for record in self._records.values() if record.user_id == user_id]

    def clear(self) -> None:
        self._records.clear()
