from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.blocks import Block, BlockKind
from ..models.stage_result import ErrorKind, Failure, StageResult, Success
from ..models.storage import DocHandle, Folder
from .contracts import DocumentStore
from .normalizer import normalize_value

"""Document writer: header/value pairs -> heading/paragraph blocks.

The document is created and moved into the target folder first, then filled.
A missing header or value at index i stops the write right there; the blocks
already appended are committed and the document stays in place. There is no
rollback of the move or of earlier blocks.
"""

logger = logging.getLogger(__name__)


@dataclass
class WriteOutcome:
    """What a write produced, successful or not."""
    url: str | None = None
    blocks: list[Block] = field(default_factory=list)


def _is_missing(values: Sequence[Any], index: int) -> bool:
    if index >= len(values):
        return True
    value = values[index]
    # float NaN is the pandas spelling of a missing cell
    return value is None or (isinstance(value, float) and value != value)


def _append(store: DocumentStore, doc: DocHandle, block: Block, outcome: WriteOutcome) -> None:
    if block.kind is BlockKind.HEADING:
        store.append_heading(doc, block.text)
    else:
        store.append_paragraph(doc, block.text)
    outcome.blocks.append(block)


def write_to_doc(
    store: DocumentStore,
    file_name: str,
    target_folder: Folder,
    data_row: Sequence[Any],
    header_row: Sequence[Any],
    *,
    timezone: str = "UTC",
    outcome: WriteOutcome | None = None,
) -> StageResult[str]:
    """Create ``file_name`` inside ``target_folder`` and transcribe the row.

    Returns the document URL on success. ``outcome`` (optional) is filled with
    the appended blocks so callers can report partial writes.
    """
    if outcome is None:
        outcome = WriteOutcome()
    try:
        doc = store.create_document(file_name)
        store.move(doc, target_folder)
    except Exception as e:
        return Failure(ErrorKind.DOCUMENT_WRITE_ERROR, f"Could not create document '{file_name}': {e}")

    failure: Failure | None = None
    try:
        for i in range(len(header_row)):
            if _is_missing(header_row, i):
                failure = Failure(ErrorKind.MISSING_HEADER, f"Missing header at index {i}.", index=i)
                break
            _append(store, doc, Block.heading(normalize_value(header_row[i], timezone)), outcome)
            if _is_missing(data_row, i):
                failure = Failure(ErrorKind.MISSING_VALUE, f"Missing value at index {i}.", index=i)
                break
            _append(store, doc, Block.body(normalize_value(data_row[i], timezone)), outcome)
        store.commit(doc)
        if failure is not None:
            logger.warning(f"partial document left in place: {doc.id} ({len(outcome.blocks)} blocks)")
            return failure
        outcome.url = store.url_of(doc)
    except Exception as e:
        return Failure(ErrorKind.DOCUMENT_WRITE_ERROR, f"Could not write document '{file_name}': {e}")
    logger.debug(f"wrote {len(outcome.blocks)} blocks to {doc.id}")
    return Success(outcome.url)
