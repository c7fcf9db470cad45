"""Catalog reference data (read-only for the core)."""

from __future__ import annotations

from dataclasses import dataclass

from dexsync.domain.model.cells import parse_int


@dataclass(frozen=True, slots=True, kw_only=True)
class CatalogItem:
    id: str
    number: str
    name: str
    category: str
    group: str
    image_ref: str | None = None

    @property
    def ordinal(self) -> int:
        """Numeric form of ``number`` used for ordering; ``0`` when not numeric."""
        return parse_int(self.number)
