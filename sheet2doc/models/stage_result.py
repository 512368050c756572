from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

"""Tagged stage results for the export pipeline.

Every pipeline stage returns either ``Success(data)`` or ``Failure(kind, message)``.
Expected conditions (bad selection, cancelled prompt, missing cell) travel as
``Failure`` values; collaborator exceptions are classified into one of the
``*_ERROR`` kinds by the stage that caught them.
"""

__all__ = [
    "ErrorKind",
    "Success",
    "Failure",
    "StageResult",
]

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure taxonomy. Values double as ``error_type`` in the error log."""
    SELECTION_INVALID = "SELECTION_INVALID"
    NO_HEADERS = "NO_HEADERS"
    READ_ERROR = "READ_ERROR"
    PROMPT_CANCELLED = "PROMPT_CANCELLED"
    PROMPT_DISMISSED = "PROMPT_DISMISSED"
    PROMPT_EMPTY = "PROMPT_EMPTY"
    PROMPT_ERROR = "PROMPT_ERROR"
    FOLDER_RESOLUTION_ERROR = "FOLDER_RESOLUTION_ERROR"
    MISSING_HEADER = "MISSING_HEADER"
    MISSING_VALUE = "MISSING_VALUE"
    DOCUMENT_WRITE_ERROR = "DOCUMENT_WRITE_ERROR"

    @property
    def is_cancellation(self) -> bool:
        return self in (ErrorKind.PROMPT_CANCELLED, ErrorKind.PROMPT_DISMISSED)


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Failure:
    """Failed stage outcome.

    Attributes:
        kind: classification from ``ErrorKind``
        message: user-facing text (shown in the alert)
        stage: pipeline stage label, filled in by the orchestrator when empty
        index: column index for MISSING_HEADER / MISSING_VALUE
    """
    kind: ErrorKind
    message: str
    stage: str = ""
    index: int | None = None


StageResult = Union[Success[T], Failure]
