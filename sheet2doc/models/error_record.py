from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

"""ErrorRecord model for the JSON Lines error log.

One record is written per failed run. ``row`` is the selected spreadsheet row,
or -1 when the failure happened before a row could be identified.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        spreadsheet: spreadsheet file the run read from
        sheet: worksheet name ("" for the default sheet)
        row: selected row number (1-based), -1 if unknown
        stage: pipeline stage that failed
        error_type: ErrorKind value in UPPER_SNAKE_CASE
        message: user-facing failure message
    """
    timestamp: str
    spreadsheet: str
    sheet: str
    row: int
    stage: str
    error_type: str
    message: str

    @staticmethod
    def create(
        spreadsheet: str, sheet: str, row: int, stage: str, error_type: str, message: str
    ) -> ErrorRecord:
        ts = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            spreadsheet=spreadsheet,
            sheet=sheet,
            row=row,
            stage=stage,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
