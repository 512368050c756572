from __future__ import annotations

from ..models.stage_result import ErrorKind, Failure, StageResult, Success
from ..models.storage import PromptButton
from .contracts import AlertService, PromptService

PROMPT_TITLE = "Enter a name for the new document"
PROMPT_PLACEHOLDER = "File name"

CANCELLED_MESSAGE = "Document creation cancelled."
DISMISSED_MESSAGE = "The file name dialog was closed."
EMPTY_MESSAGE = "Please enter a file name."


def prompt_filename(prompt: PromptService, alerts: AlertService) -> StageResult[str]:
    """Ask the user for the document title.

    Whitespace-only input counts as empty. On success the user is told the
    name that will be used before the function returns.
    """
    response = prompt.prompt_text(PROMPT_TITLE, PROMPT_PLACEHOLDER)
    if response.button is PromptButton.CANCEL:
        return Failure(ErrorKind.PROMPT_CANCELLED, CANCELLED_MESSAGE)
    if response.button is PromptButton.CLOSE:
        return Failure(ErrorKind.PROMPT_DISMISSED, DISMISSED_MESSAGE)
    name = response.text.strip()
    if not name:
        return Failure(ErrorKind.PROMPT_EMPTY, EMPTY_MESSAGE)
    alerts.alert(f"Creating document '{name}'.")
    return Success(name)
