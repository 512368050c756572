from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .stage_result import Failure

"""Run result model for a single spreadsheet row export.

One ``RunResult`` is produced per invocation and rendered as the SUMMARY line.
Nothing here outlives the process.
"""


class RunStatus(Enum):
    """Final state of a run.

    - SUCCESS: document written and its address displayed
    - FAILED: a stage failed; the failure is attached
    - CANCELLED: the user cancelled or dismissed the filename prompt
    """
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    title: str | None = None  # document title entered by the user
    url: str | None = None  # external address of the written document
    block_count: int = 0  # blocks appended (also counts partial writes)
    failure: Failure | None = None
