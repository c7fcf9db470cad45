"""In-memory ``TabularStore`` with Sheets-like range semantics."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from dexsync.domain.model import Row
    from dexsync.domain.ports.store import CellRange, TableSchema


def _is_blank(row: Sequence[str]) -> bool:
    return not any(row)


def _trim(row: Sequence[str]) -> list[str]:
    trimmed = list(row)
    while trimmed and trimmed[-1] == "":
        trimmed.pop()
    return trimmed


@dataclass
class FakeTabularStore:
    """Data rows per sheet name, header excluded; sheet row 2 is index 0."""

    tables: dict[str, list[list[str]]] = field(default_factory=dict)
    calls: list[tuple[str, str, str]] = field(default_factory=list)
    failures: dict[str, list[BaseException]] = field(
        default_factory=lambda: defaultdict(list)
    )
    hooks: dict[str, list[Callable[[FakeTabularStore], None]]] = field(
        default_factory=lambda: defaultdict(list)
    )

    def rows(self, name: str) -> list[list[str]]:
        return [list(row) for row in self.tables.get(name, [])]

    def seed(self, name: str, rows: Sequence[Sequence[str]]) -> None:
        self.tables[name] = [list(row) for row in rows]

    def fail_next(self, operation: str, error: BaseException) -> None:
        self.failures[operation].append(error)

    def before_next(self, operation: str, hook: Callable[[FakeTabularStore], None]) -> None:
        self.hooks[operation].append(hook)

    def operations(self) -> list[str]:
        return [operation for operation, _, _ in self.calls]

    def raw_append(self, name: str, row: Sequence[str]) -> None:
        table = self.tables.setdefault(name, [])
        self._compact(table)
        table.append(list(row))

    async def read_range(self, table: TableSchema, cell_range: CellRange) -> list[Row]:
        self._enter("read_range", table, cell_range)
        rows = self.tables.get(table.name, [])
        start, stop = self._row_bounds(table, cell_range, len(rows))
        selected = [
            _trim(row[cell_range.first_column : cell_range.last_column + 1])
            for row in rows[start:stop]
        ]
        while selected and not selected[-1]:
            selected.pop()
        return selected

    async def append_row(self, table: TableSchema, row: Row) -> None:
        self._enter("append_row", table, table.columns_range())
        self.raw_append(table.name, row)

    async def append_rows(self, table: TableSchema, rows: Sequence[Row]) -> None:
        self._enter("append_rows", table, table.columns_range())
        for row in rows:
            self.raw_append(table.name, row)

    async def update_range(
        self,
        table: TableSchema,
        cell_range: CellRange,
        rows: Sequence[Row],
    ) -> None:
        self._enter("update_range", table, cell_range)
        target = self.tables.setdefault(table.name, [])
        start, _ = self._row_bounds(table, cell_range, len(target))
        for offset, values in enumerate(rows):
            index = start + offset
            while len(target) <= index:
                target.append([""] * table.width)
            current = target[index]
            for column, value in enumerate(values, start=cell_range.first_column):
                while len(current) <= column:
                    current.append("")
                current[column] = value
        self._compact(target)

    async def clear_range(self, table: TableSchema, cell_range: CellRange) -> None:
        self._enter("clear_range", table, cell_range)
        target = self.tables.setdefault(table.name, [])
        start, stop = self._row_bounds(table, cell_range, len(target))
        for row in target[start:stop]:
            for column in range(cell_range.first_column, min(cell_range.last_column + 1, len(row))):
                row[column] = ""
        self._compact(target)

    def _enter(self, operation: str, table: TableSchema, cell_range: CellRange) -> None:
        self.calls.append((operation, table.name, cell_range.to_a1()))
        if self.hooks[operation]:
            self.hooks[operation].pop(0)(self)
        if self.failures[operation]:
            raise self.failures[operation].pop(0)

    @staticmethod
    def _row_bounds(table: TableSchema, cell_range: CellRange, size: int) -> tuple[int, int]:
        first_data_row = table.header_rows + 1
        first = cell_range.first_row or first_data_row
        start = max(first - first_data_row, 0)
        stop = size if cell_range.last_row is None else cell_range.last_row - first_data_row + 1
        return start, max(stop, start)

    @staticmethod
    def _compact(rows: list[list[str]]) -> None:
        while rows and _is_blank(rows[-1]):
            rows.pop()
