"""Read access to the catalog reference data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from dexsync.domain.tables import CATALOG, catalog_item_from_row, is_blank_row

if TYPE_CHECKING:
    from dexsync.domain.model import CatalogItem
    from dexsync.domain.ports.store import TabularStore


@dataclass(slots=True)
class CatalogReader:
    store: TabularStore

    async def list_items(self) -> list[CatalogItem]:
        rows = await self.store.read_range(CATALOG, CATALOG.data_range())
        items = [catalog_item_from_row(row) for row in rows if not is_blank_row(row)]
        return sorted(items, key=lambda item: (item.group, item.ordinal, item.id))
