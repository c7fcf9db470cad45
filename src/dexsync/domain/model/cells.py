"""Cell-level encoding rules shared by every table."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

TRUE_CELL: Final[str] = "TRUE"
EMPTY_CELL: Final[str] = ""

Row = list[str]


def parse_flag(value: object) -> bool:
    """Only the literal ``"TRUE"`` is true; anything else, absent included, is false."""
    return value == TRUE_CELL


def format_flag(value: bool) -> str:
    return TRUE_CELL if value else EMPTY_CELL


def parse_int(value: object, *, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def cell(row: Sequence[object], index: int) -> str:
    """Return the cell at ``index`` as text.

    Sheets drops trailing empty cells, so short rows are padded with ``""``.
    """
    if index >= len(row):
        return EMPTY_CELL
    value = row[index]
    if value is None:
        return EMPTY_CELL
    return value if isinstance(value, str) else str(value)


def optional_cell(row: Sequence[object], index: int) -> str | None:
    return cell(row, index) or None
