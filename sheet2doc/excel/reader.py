from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.selection import Selection
from ..models.stage_result import ErrorKind, Failure, StageResult, Success
from ..services.contracts import SheetSource

"""Spreadsheet reading.

``ExcelSheet`` adapts one worksheet of an .xlsx workbook (read with pandas) to
the ``SheetSource`` contract. ``read_headers`` / ``read_selected_row`` are the
two pure read operations of the export pipeline; both span the sheet's full
populated width regardless of how many columns the selection covers.

Blank cells read as ``""``: a blank cell is an empty string, not a missing value.
"""

__all__ = [
    "ExcelSheet",
    "SheetReadError",
    "read_headers",
    "read_selected_row",
]

NO_HEADERS_MESSAGE = "No headers found in the first row."


class SheetReadError(Exception):
    """Raised when the workbook or worksheet cannot be read."""


def _to_native(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class ExcelSheet:
    """One worksheet of an .xlsx file, loaded lazily on first access."""

    def __init__(self, path: Path, sheet_name: str | None = None) -> None:
        self.path = path
        self.sheet_name = sheet_name
        self._frame: pd.DataFrame | None = None

    @property
    def frame(self) -> pd.DataFrame:
        if self._frame is None:
            self._frame = self._load()
        return self._frame

    def _load(self) -> pd.DataFrame:
        try:
            # keep_default_na=False: literal "NA" / "null" strings stay text
            df = pd.read_excel(
                self.path,
                sheet_name=self.sheet_name if self.sheet_name is not None else 0,
                header=None,
                keep_default_na=False,
                na_values=[],
            )
        except Exception as e:
            raise SheetReadError(f"cannot read {self.path}: {e}") from e
        return df.astype(object).where(df.notna(), "")

    def last_populated_column(self) -> int:
        df = self.frame
        for col in range(df.shape[1] - 1, -1, -1):
            if not all(_is_blank(v) for v in df.iloc[:, col].tolist()):
                return col + 1
        return 0

    def read_row(self, row_index: int, from_col: int, num_cols: int) -> list[Any]:
        if row_index < 1 or from_col < 1 or num_cols < 0:
            raise SheetReadError(
                f"invalid range row={row_index} col={from_col} cols={num_cols}"
            )
        df = self.frame
        values: list[Any] = []
        for col in range(from_col - 1, from_col - 1 + num_cols):
            if row_index - 1 < df.shape[0] and col < df.shape[1]:
                values.append(_to_native(df.iat[row_index - 1, col]))
            else:
                values.append("")
        return values


def read_headers(sheet: SheetSource, header_row: int = 1) -> StageResult[list[Any]]:
    """Read the header row across all populated columns."""
    try:
        width = sheet.last_populated_column()
        headers = list(sheet.read_row(header_row, 1, width)) if width > 0 else []
    except Exception as e:
        return Failure(ErrorKind.READ_ERROR, f"Could not read headers: {e}")
    if not headers:
        return Failure(ErrorKind.NO_HEADERS, NO_HEADERS_MESSAGE)
    return Success(headers)


def read_selected_row(sheet: SheetSource, selection: Selection) -> StageResult[list[Any]]:
    """Read the selected row; the selection picks the row, the sheet width picks the columns."""
    try:
        width = sheet.last_populated_column()
        return Success(list(sheet.read_row(selection.start_row, 1, width)))
    except Exception as e:
        return Failure(ErrorKind.READ_ERROR, f"Could not read the selected row: {e}")
