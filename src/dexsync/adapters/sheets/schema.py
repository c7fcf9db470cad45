"""Pydantic models describing the Sheets v4 ``values`` payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SheetsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _stringify_cells(value: object) -> object:
    if not isinstance(value, list):
        return value
    rows: list[list[str]] = []
    for row in value:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(row, list):
            rows.append([])
            continue
        rows.append(["" if item is None else str(item) for item in row])  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
    return rows


class ValueRange(SheetsBaseModel):
    range: str | None = None
    major_dimension: Literal["ROWS", "COLUMNS"] = Field(default="ROWS", alias="majorDimension")
    values: list[list[str]] = Field(default_factory=list)

    _normalize_values = field_validator("values", mode="before")(_stringify_cells)


class UpdateValuesResponse(SheetsBaseModel):
    spreadsheet_id: str | None = Field(default=None, alias="spreadsheetId")
    updated_range: str | None = Field(default=None, alias="updatedRange")
    updated_rows: int = Field(default=0, alias="updatedRows")
    updated_cells: int = Field(default=0, alias="updatedCells")


class AppendValuesResponse(SheetsBaseModel):
    spreadsheet_id: str | None = Field(default=None, alias="spreadsheetId")
    table_range: str | None = Field(default=None, alias="tableRange")
    updates: UpdateValuesResponse = Field(default_factory=UpdateValuesResponse)


class ClearValuesResponse(SheetsBaseModel):
    spreadsheet_id: str | None = Field(default=None, alias="spreadsheetId")
    cleared_range: str | None = Field(default=None, alias="clearedRange")
