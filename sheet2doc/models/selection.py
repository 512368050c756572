from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Selection",
]


@dataclass(frozen=True)
class Selection:
    """Rectangular region of the active sheet.

    Rows are 1-based. An empty selection is represented with zeros.
    """
    start_row: int
    num_rows: int
    num_columns: int

    @classmethod
    def empty(cls) -> Selection:
        return cls(start_row=0, num_rows=0, num_columns=0)
