from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from ..models.selection import Selection
from ..models.storage import DocHandle, Folder, PromptResponse

"""Collaborator contracts consumed by the export services.

The services never reach for a concrete host; the CLI wires console/file-system
implementations (``sheet2doc.ui``, ``sheet2doc.store``, ``sheet2doc.excel``) and
the tests wire in-memory fakes.
"""

__all__ = [
    "SelectionSource",
    "SheetSource",
    "PromptService",
    "AlertService",
    "FolderStore",
    "DocumentStore",
    "ResultDisplay",
]

CellValue = Any


class SelectionSource(Protocol):
    def get_active_selection(self) -> Selection: ...


class SheetSource(Protocol):
    def read_row(self, row_index: int, from_col: int, num_cols: int) -> Sequence[CellValue]:
        """Read ``num_cols`` cells of 1-based row ``row_index`` starting at 1-based ``from_col``."""
        ...

    def last_populated_column(self) -> int: ...


class PromptService(Protocol):
    def prompt_text(self, title: str, placeholder: str) -> PromptResponse: ...


class AlertService(Protocol):
    def alert(self, message: str) -> None: ...


class FolderStore(Protocol):
    def parent_of(self, file_id: str) -> Folder | None: ...

    def find_child_by_name(self, folder: Folder, name: str) -> Folder | None: ...

    def create_child(self, folder: Folder, name: str) -> Folder: ...


class DocumentStore(Protocol):
    def create_document(self, title: str) -> DocHandle: ...

    def append_heading(self, doc: DocHandle, text: str) -> None: ...

    def append_paragraph(self, doc: DocHandle, text: str) -> None: ...

    def commit(self, doc: DocHandle) -> None: ...

    def move(self, doc: DocHandle, target: Folder) -> None: ...

    def url_of(self, doc: DocHandle) -> str: ...


class ResultDisplay(Protocol):
    def show_link(self, url: str) -> None: ...
