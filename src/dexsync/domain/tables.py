"""Sheet layouts and row translation for the three tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from dexsync.domain.model import CatalogItem, OwnershipRecord, User, format_flag, parse_flag
from dexsync.domain.model.cells import EMPTY_CELL, cell, optional_cell
from dexsync.domain.ports.store import TableSchema

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dexsync.domain.model import Row

USERS: Final = TableSchema(name="Users", columns=("id", "display_name", "email"))
CATALOG: Final = TableSchema(
    name="Cards",
    columns=("id", "number", "name", "category", "group", "image_ref"),
)
OWNERSHIP: Final = TableSchema(
    name="Ownership",
    columns=("item_id", "user_id", "not_owned", "tradeable", "notes"),
)


def user_from_row(row: Sequence[object]) -> User:
    return User(id=cell(row, 0), display_name=cell(row, 1), email=cell(row, 2))


def user_to_row(user: User) -> Row:
    return [user.id, user.display_name, user.email]


def catalog_item_from_row(row: Sequence[object]) -> CatalogItem:
    return CatalogItem(
        id=cell(row, 0),
        number=cell(row, 1),
        name=cell(row, 2),
        category=cell(row, 3),
        group=cell(row, 4),
        image_ref=optional_cell(row, 5),
    )


def ownership_from_row(row: Sequence[object]) -> OwnershipRecord:
    return OwnershipRecord(
        item_id=cell(row, 0),
        user_id=cell(row, 1),
        not_owned=parse_flag(cell(row, 2)),
        tradeable=parse_flag(cell(row, 3)),
        notes=optional_cell(row, 4),
    )


def ownership_to_row(record: OwnershipRecord) -> Row:
    return [
        record.item_id,
        record.user_id,
        format_flag(record.not_owned),
        format_flag(record.tradeable),
        record.notes or EMPTY_CELL,
    ]


def is_blank_row(row: Sequence[object]) -> bool:
    return not any(cell(row, index) for index in range(len(row)))
