from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Value types exchanged with the folder/document stores and the prompt service."""

__all__ = [
    "Folder",
    "DocHandle",
    "PromptButton",
    "PromptResponse",
]


@dataclass(frozen=True)
class Folder:
    """Named container inside a store. ``id`` is store specific (a path for local stores)."""
    id: str
    name: str


@dataclass
class DocHandle:
    """Open document returned by ``DocumentStore.create_document``.

    ``id`` identifies the underlying file and may change when the store moves it.
    ``native`` carries the store's own document object (python-docx ``Document``
    for the local store).
    """
    id: str
    title: str
    native: Any = field(default=None, repr=False)


class PromptButton(Enum):
    OK = "ok"
    CANCEL = "cancel"
    CLOSE = "close"


@dataclass(frozen=True)
class PromptResponse:
    button: PromptButton
    text: str = ""
