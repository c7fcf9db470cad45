"""Ownership records and the implicit-default rule."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple


class OwnershipKey(NamedTuple):
    item_id: str
    user_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class OwnershipRecord:
    """One user's stance on one catalog item.

    A missing row means "owned, not tradeable"; that state is never stored.
    """

    item_id: str
    user_id: str
    not_owned: bool = False
    tradeable: bool = False
    notes: str | None = None

    @classmethod
    def default(cls, item_id: str, user_id: str) -> OwnershipRecord:
        return cls(item_id=item_id, user_id=user_id)

    @property
    def key(self) -> OwnershipKey:
        return OwnershipKey(self.item_id, self.user_id)

    @property
    def is_default(self) -> bool:
        return not self.not_owned and not self.tradeable

    def with_flags(
        self,
        *,
        not_owned: bool | None = None,
        tradeable: bool | None = None,
    ) -> OwnershipRecord:
        return replace(
            self,
            not_owned=self.not_owned if not_owned is None else not_owned,
            tradeable=self.tradeable if tradeable is None else tradeable,
        )
