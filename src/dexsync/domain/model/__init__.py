"""Public domain model surface."""

from __future__ import annotations

from dexsync.domain.model.catalog import CatalogItem
from dexsync.domain.model.cells import Row, format_flag, parse_flag, parse_int
from dexsync.domain.model.ownership import OwnershipKey, OwnershipRecord
from dexsync.domain.model.user import Identity, User

__all__ = [
    "CatalogItem",
    "Identity",
    "OwnershipKey",
    "OwnershipRecord",
    "Row",
    "User",
    "format_flag",
    "parse_flag",
    "parse_int",
]
