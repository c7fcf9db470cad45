"""Port for the remote row-oriented store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dexsync.domain.model import Row


def column_letter(index: int) -> str:
    """Translate a 0-based column index into its A1 letter (0 -> A, 26 -> AA)."""

    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


@dataclass(frozen=True, slots=True)
class CellRange:
    """Rectangular block of cells; rows are 1-based sheet rows, columns 0-based.

    ``first_row=None`` spans whole columns and ``last_row=None`` is open-ended.
    """

    first_column: int
    last_column: int
    first_row: int | None = None
    last_row: int | None = None

    def to_a1(self) -> str:
        start = column_letter(self.first_column)
        end = column_letter(self.last_column)
        if self.first_row is not None:
            start += str(self.first_row)
        if self.last_row is not None:
            end += str(self.last_row)
        if start == end:
            return start
        return f"{start}:{end}"


@dataclass(frozen=True, slots=True)
class TableSchema:
    """Layout of one sheet: its name, ordered columns and header rows."""

    name: str
    columns: tuple[str, ...]
    header_rows: int = 1

    @property
    def width(self) -> int:
        return len(self.columns)

    def column_index(self, column: str) -> int:
        try:
            return self.columns.index(column)
        except ValueError:
            raise KeyError(f"{self.name} has no column {column!r}") from None

    def sheet_row(self, index: int) -> int:
        """Sheet row number of the ``index``-th data row (0-based)."""
        return index + self.header_rows + 1

    def columns_range(self) -> CellRange:
        return CellRange(first_column=0, last_column=self.width - 1)

    def data_range(self) -> CellRange:
        return CellRange(
            first_column=0,
            last_column=self.width - 1,
            first_row=self.header_rows + 1,
        )

    def row_range(self, index: int) -> CellRange:
        row = self.sheet_row(index)
        return CellRange(first_column=0, last_column=self.width - 1, first_row=row, last_row=row)

    def cell_range(self, column: str, index: int) -> CellRange:
        position = self.column_index(column)
        row = self.sheet_row(index)
        return CellRange(
            first_column=position,
            last_column=position,
            first_row=row,
            last_row=row,
        )


@runtime_checkable
class TabularStore(Protocol):
    """Range-scoped access to a remote spreadsheet-like store.

    Implementations raise ``TransportError`` and ``AuthorizationError``; they
    never retry.
    """

    async def read_range(self, table: TableSchema, cell_range: CellRange) -> list[Row]: ...

    async def append_row(self, table: TableSchema, row: Row) -> None: ...

    async def append_rows(self, table: TableSchema, rows: Sequence[Row]) -> None: ...

    async def update_range(
        self,
        table: TableSchema,
        cell_range: CellRange,
        rows: Sequence[Row],
    ) -> None: ...

    async def clear_range(self, table: TableSchema, cell_range: CellRange) -> None: ...
