from __future__ import annotations

from ..models.selection import Selection
from ..models.stage_result import ErrorKind, Failure, StageResult, Success

SELECT_A_ROW = "Please select a row."
SELECT_ONE_ROW = "Please select only one row at a time."


def validate_selection(selection: Selection) -> StageResult[Selection]:
    """Accept exactly one row with at least one column."""
    if selection.num_rows <= 0 or selection.num_columns <= 0:
        return Failure(ErrorKind.SELECTION_INVALID, SELECT_A_ROW)
    if selection.num_rows > 1:
        return Failure(ErrorKind.SELECTION_INVALID, SELECT_ONE_ROW)
    return Success(selection)
