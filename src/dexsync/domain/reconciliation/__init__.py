"""Ownership reconciliation: remote toggles and local cache merging."""

from __future__ import annotations

from .cache import OwnershipCache
from .engine import OwnershipEngine

__all__ = ["OwnershipCache", "OwnershipEngine"]
