from __future__ import annotations

import re

from openpyxl.utils.cell import column_index_from_string

from ..models.selection import Selection
from ..services.contracts import SheetSource

"""A1-notation selections.

Supported forms (case-insensitive):

- ``B7``      single cell
- ``A5:D5``   cell range
- ``5:5``     whole rows (width = sheet's populated width)
- ``5``       shorthand for ``5:5``
"""

__all__ = [
    "A1Selection",
    "SelectionSyntaxError",
    "column_index",
    "parse_a1",
]

_CELL = re.compile(r"^([A-Z]+)([0-9]+)$")
_ROW = re.compile(r"^([0-9]+)$")


class SelectionSyntaxError(ValueError):
    """Raised for notation that is not a cell, cell range or row range."""


def column_index(letters: str) -> int:
    """``A`` -> 1, ``Z`` -> 26, ``AA`` -> 27."""
    try:
        return column_index_from_string(letters)
    except ValueError as e:
        raise SelectionSyntaxError(f"invalid column: {letters!r}") from e


def _parse_end(token: str) -> tuple[int, int | None]:
    m = _CELL.match(token)
    if m:
        return int(m.group(2)), column_index(m.group(1))
    m = _ROW.match(token)
    if m:
        return int(m.group(1)), None
    raise SelectionSyntaxError(f"invalid A1 reference: {token!r}")


def parse_a1(notation: str, sheet_width: int) -> Selection:
    """Turn A1 notation into a ``Selection``.

    Whole-row references take ``sheet_width`` as their column count. Rows are
    not required to be in order (``5:3`` is rows 3..5).
    """
    text = notation.strip().upper().replace("$", "")
    if not text:
        raise SelectionSyntaxError("empty selection")
    parts = text.split(":")
    if len(parts) > 2:
        raise SelectionSyntaxError(f"invalid A1 range: {notation!r}")
    if len(parts) == 1:
        parts = parts * 2
    (row1, col1), (row2, col2) = _parse_end(parts[0]), _parse_end(parts[1])
    if (col1 is None) != (col2 is None):
        raise SelectionSyntaxError(f"mixed cell and row references: {notation!r}")
    if row1 < 1 or row2 < 1:
        raise SelectionSyntaxError(f"row numbers start at 1: {notation!r}")
    start_row = min(row1, row2)
    num_rows = abs(row2 - row1) + 1
    if col1 is None or col2 is None:
        num_columns = sheet_width
    else:
        num_columns = abs(col2 - col1) + 1
    return Selection(start_row=start_row, num_rows=num_rows, num_columns=num_columns)


class A1Selection:
    """Selection source backed by command-line A1 notation; ``None`` means nothing selected."""

    def __init__(self, notation: str | None, sheet: SheetSource) -> None:
        self.notation = notation
        self.sheet = sheet

    def get_active_selection(self) -> Selection:
        if not self.notation:
            return Selection.empty()
        width = self.sheet.last_populated_column() if _is_row_notation(self.notation) else 0
        return parse_a1(self.notation, width)


def _is_row_notation(notation: str) -> bool:
    return all(_ROW.match(p.strip()) for p in notation.replace("$", "").split(":"))
