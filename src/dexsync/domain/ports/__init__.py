"""Domain port definitions for adapters."""

from __future__ import annotations

from .session import (
    ConsentFlow,
    Credential,
    CredentialRevoker,
    CredentialStore,
    IdentityProvider,
)
from .store import CellRange, TableSchema, TabularStore, column_letter

__all__ = [
    "CellRange",
    "ConsentFlow",
    "Credential",
    "CredentialRevoker",
    "CredentialStore",
    "IdentityProvider",
    "TableSchema",
    "TabularStore",
    "column_letter",
]
