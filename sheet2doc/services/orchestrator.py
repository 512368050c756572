from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..excel.reader import SheetReadError, read_headers, read_selected_row
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ExportConfig
from ..models.run_result import RunResult, RunStatus
from ..models.stage_result import ErrorKind, Failure, StageResult
from .contracts import (
    AlertService,
    DocumentStore,
    FolderStore,
    PromptService,
    ResultDisplay,
    SelectionSource,
    SheetSource,
)
from .folders import resolve_target_folder
from .prompt import prompt_filename
from .selection import validate_selection
from .writer import WriteOutcome, write_to_doc

"""Export orchestration.

Runs the stages strictly in order and stops at the first failure:

    selection -> entries -> headers -> filename -> folder -> document -> display

Each failure is alerted as ``"<stage>: <message>"`` and appended to
the JSON Lines error log. Nothing is retried and nothing already created is
cleaned up.
"""

logger = logging.getLogger(__name__)

STAGE_SELECTION = "selection"
STAGE_ENTRIES = "entries"
STAGE_HEADERS = "headers"
STAGE_FILENAME = "filename"
STAGE_FOLDER = "folder"
STAGE_DOCUMENT = "document"
STAGE_DISPLAY = "display"


@dataclass
class ExportServices:
    """Host collaborators for one run."""
    selection: SelectionSource
    sheet: SheetSource
    prompt: PromptService
    alerts: AlertService
    folders: FolderStore
    documents: DocumentStore
    display: ResultDisplay


class _StageFailed(Exception):
    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def _run_stage(stage: str, kind: ErrorKind, fn: Callable[[], StageResult[Any]]) -> Any:
    """Run one stage; unwrap success, raise ``_StageFailed`` on failure.

    Exceptions escaping the stage are classified as ``kind``, except sheet
    read failures, which are always ``READ_ERROR`` whichever stage first
    touched the workbook.
    """
    try:
        result = fn()
    except SheetReadError as e:
        logger.debug(f"{stage}: sheet read failed", exc_info=True)
        result = Failure(ErrorKind.READ_ERROR, str(e))
    except Exception as e:
        logger.debug(f"{stage}: unexpected {type(e).__name__}", exc_info=True)
        result = Failure(kind, str(e) or type(e).__name__)
    if isinstance(result, Failure):
        raise _StageFailed(replace(result, stage=result.stage or stage))
    return result.data


def run_export(
    services: ExportServices,
    spreadsheet_id: str,
    config: ExportConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> RunResult:
    """Export the selected row of ``spreadsheet_id`` into a new document.

    Args:
        services: host collaborators
        spreadsheet_id: identity of the spreadsheet file (its path for local stores)
        config: export settings, defaults when None
        error_log: buffer for failure records; by default one under
            ``config.logs_directory`` (disabled when that is None)

    Returns:
        RunResult describing success, failure or cancellation
    """
    if config is None:
        config = ExportConfig()
    if error_log is None and config.logs_directory is not None:
        error_log = ErrorLogBuffer(Path(config.logs_directory))

    start_time = datetime.now(timezone.utc)
    outcome = WriteOutcome()
    row = -1
    title: str | None = None

    def _finish(status: RunStatus, url: str | None = None, failure: Failure | None = None) -> RunResult:
        end_time = datetime.now(timezone.utc)
        return RunResult(
            status=status,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
            title=title,
            url=url,
            block_count=len(outcome.blocks),
            failure=failure,
        )

    try:
        selection = _run_stage(
            STAGE_SELECTION,
            ErrorKind.SELECTION_INVALID,
            lambda: validate_selection(services.selection.get_active_selection()),
        )
        row = selection.start_row
        logger.debug(f"selection row={row} columns={selection.num_columns}")

        entries = _run_stage(
            STAGE_ENTRIES, ErrorKind.READ_ERROR, lambda: read_selected_row(services.sheet, selection)
        )
        headers = _run_stage(
            STAGE_HEADERS, ErrorKind.READ_ERROR, lambda: read_headers(services.sheet, config.header_row)
        )
        logger.debug(f"read {len(headers)} headers, {len(entries)} entries")

        title = _run_stage(
            STAGE_FILENAME,
            ErrorKind.PROMPT_ERROR,
            lambda: prompt_filename(services.prompt, services.alerts),
        )
        folder = _run_stage(
            STAGE_FOLDER,
            ErrorKind.FOLDER_RESOLUTION_ERROR,
            lambda: resolve_target_folder(services.folders, spreadsheet_id, config.folder_name),
        )
        url = _run_stage(
            STAGE_DOCUMENT,
            ErrorKind.DOCUMENT_WRITE_ERROR,
            lambda: write_to_doc(
                services.documents,
                title,
                folder,
                entries,
                headers,
                timezone=config.timezone,
                outcome=outcome,
            ),
        )
    except _StageFailed as e:
        failure = e.failure
        _report(services.alerts, failure)
        if error_log is not None:
            _record(error_log, spreadsheet_id, config, row, failure)
        status = RunStatus.CANCELLED if failure.kind.is_cancellation else RunStatus.FAILED
        return _finish(status, failure=failure)

    try:
        services.display.show_link(url)
    except Exception as e:
        # the document exists; the run still succeeded
        logger.warning(f"{STAGE_DISPLAY}: could not show link {url}: {e}")
    return _finish(RunStatus.SUCCESS, url=url)


def _report(alerts: AlertService, failure: Failure) -> None:
    message = f"{failure.stage}: {failure.message}"
    logger.debug(f"stage failed kind={failure.kind.value} index={failure.index}")
    try:
        alerts.alert(message)
    except Exception as e:
        logger.warning(f"alert failed: {e}")


def _record(
    error_log: ErrorLogBuffer, spreadsheet_id: str, config: ExportConfig, row: int, failure: Failure
) -> None:
    error_log.append(
        ErrorRecord.create(
            spreadsheet=spreadsheet_id,
            sheet=config.sheet or "",
            row=row,
            stage=failure.stage,
            error_type=failure.kind.value,
            message=failure.message,
        )
    )
    try:
        path = error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")
        return
    logger.debug(f"error log: {path}")
