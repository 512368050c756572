from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_FOLDER_NAME
from ..models.stage_result import ErrorKind, Failure, StageResult, Success
from ..models.storage import Folder
from .contracts import FolderStore

"""Target folder provisioning.

The folder is looked up by literal name under the spreadsheet's parent and
created only when absent. Lookup-then-create is not atomic: two runs started
at the same moment can each create a folder with the same name.
"""

logger = logging.getLogger(__name__)


def resolve_target_folder(
    folders: FolderStore, spreadsheet_id: str, folder_name: str = DEFAULT_FOLDER_NAME
) -> StageResult[Folder]:
    try:
        parent = folders.parent_of(spreadsheet_id)
        if parent is None:
            return Failure(
                ErrorKind.FOLDER_RESOLUTION_ERROR,
                f"The spreadsheet has no parent folder: {spreadsheet_id}",
            )
        existing = folders.find_child_by_name(parent, folder_name)
        if existing is not None:
            logger.debug(f"reusing folder {existing.id}")
            return Success(existing)
        created = folders.create_child(parent, folder_name)
        logger.info(f"created folder {created.id}")
        return Success(created)
    except Exception as e:
        return Failure(ErrorKind.FOLDER_RESOLUTION_ERROR, f"Could not resolve folder '{folder_name}': {e}")
