"""Domain models for the spreadsheet row -> document exporter.

Plain dataclasses and enums shared by the services, the stores and the CLI.
"""

from .blocks import Block, BlockKind
from .config_models import DEFAULT_FOLDER_NAME, ExportConfig
from .error_record import ErrorRecord
from .run_result import RunResult, RunStatus
from .selection import Selection
from .stage_result import ErrorKind, Failure, StageResult, Success
from .storage import DocHandle, Folder, PromptButton, PromptResponse

__all__ = [
    # Configuration
    "DEFAULT_FOLDER_NAME",
    "ExportConfig",
    # Pipeline values
    "Block",
    "BlockKind",
    "Selection",
    "ErrorKind",
    "Failure",
    "StageResult",
    "Success",
    # Collaborator values
    "DocHandle",
    "Folder",
    "PromptButton",
    "PromptResponse",
    # Results
    "ErrorRecord",
    "RunResult",
    "RunStatus",
]
