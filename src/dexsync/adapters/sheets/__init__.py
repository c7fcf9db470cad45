"""Google Sheets adapter package."""

from __future__ import annotations

from .client import SheetsStoreClient, a1_range
from .schema import AppendValuesResponse, ClearValuesResponse, UpdateValuesResponse, ValueRange

__all__ = [
    "AppendValuesResponse",
    "ClearValuesResponse",
    "SheetsStoreClient",
    "UpdateValuesResponse",
    "ValueRange",
    "a1_range",
]
