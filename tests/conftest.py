# Shared pytest fixtures: temp working directory, xlsx builder, in-memory collaborators
from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from sheet2doc.logging.init import reset_logging
from sheet2doc.models.selection import Selection
from sheet2doc.models.storage import DocHandle, Folder, PromptButton, PromptResponse
from sheet2doc.services.orchestrator import ExportServices


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def make_xlsx():
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        with pd.ExcelWriter(path) as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


class FakeSheet:
    """Rows are 0-based lists here; the contract is 1-based."""

    def __init__(self, rows: list[list[Any]], fail: Exception | None = None) -> None:
        self.rows = rows
        self.fail = fail
        self.reads: list[tuple[int, int, int]] = []

    def last_populated_column(self) -> int:
        if self.fail is not None:
            raise self.fail
        return max((len(r) for r in self.rows), default=0)

    def read_row(self, row_index: int, from_col: int, num_cols: int) -> list[Any]:
        if self.fail is not None:
            raise self.fail
        self.reads.append((row_index, from_col, num_cols))
        row = self.rows[row_index - 1] if row_index - 1 < len(self.rows) else []
        cells = row[from_col - 1:from_col - 1 + num_cols]
        return list(cells) + [""] * (num_cols - len(cells))


class FakeSelectionSource:
    def __init__(self, selection: Selection) -> None:
        self.selection = selection

    def get_active_selection(self) -> Selection:
        return self.selection


class FakePrompt:
    def __init__(self, button: PromptButton = PromptButton.OK, text: str = "") -> None:
        self.response = PromptResponse(button, text)
        self.calls: list[tuple[str, str]] = []

    def prompt_text(self, title: str, placeholder: str) -> PromptResponse:
        self.calls.append((title, placeholder))
        return self.response


class RecordingUI:
    def __init__(self) -> None:
        self.alerts: list[str] = []
        self.links: list[str] = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def show_link(self, url: str) -> None:
        self.links.append(url)


class FakeFolderStore:
    """Folder tree keyed by id; files map to their parent folder."""

    def __init__(self) -> None:
        self.parents: dict[str, Folder] = {}
        self.children: dict[str, list[Folder]] = {}
        self.created: list[Folder] = []
        self._next = 0

    def add_file(self, file_id: str, parent: Folder | None) -> None:
        if parent is not None:
            self.parents[file_id] = parent
            self.children.setdefault(parent.id, [])

    def parent_of(self, file_id: str) -> Folder | None:
        return self.parents.get(file_id)

    def find_child_by_name(self, folder: Folder, name: str) -> Folder | None:
        for child in self.children.get(folder.id, []):
            if child.name == name:
                return child
        return None

    def create_child(self, folder: Folder, name: str) -> Folder:
        self._next += 1
        child = Folder(id=f"folder-{self._next}", name=name)
        self.children.setdefault(folder.id, []).append(child)
        self.created.append(child)
        return child


@dataclass
class FakeDoc:
    title: str
    blocks: list[tuple[str, str]] = field(default_factory=list)
    folder: Folder | None = None
    commits: int = 0


class FakeDocumentStore:
    def __init__(self, fail_on: str | None = None) -> None:
        self.docs: dict[str, FakeDoc] = {}
        self.calls: list[str] = []
        self.fail_on = fail_on

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name == self.fail_on:
            raise RuntimeError(f"{name} failed")

    def create_document(self, title: str) -> DocHandle:
        self._call("create_document")
        doc_id = f"doc-{len(self.docs) + 1}"
        self.docs[doc_id] = FakeDoc(title=title)
        return DocHandle(id=doc_id, title=title)

    def append_heading(self, doc: DocHandle, text: str) -> None:
        self._call("append_heading")
        self.docs[doc.id].blocks.append(("heading", text))

    def append_paragraph(self, doc: DocHandle, text: str) -> None:
        self._call("append_paragraph")
        self.docs[doc.id].blocks.append(("body", text))

    def commit(self, doc: DocHandle) -> None:
        self._call("commit")
        self.docs[doc.id].commits += 1

    def move(self, doc: DocHandle, target: Folder) -> None:
        self._call("move")
        self.docs[doc.id].folder = target

    def url_of(self, doc: DocHandle) -> str:
        self._call("url_of")
        return f"https://docs.example.test/{doc.id}"


@pytest.fixture()
def root_folder() -> Folder:
    return Folder(id="root", name="My Drive")


@pytest.fixture()
def folder_store(root_folder: Folder) -> FakeFolderStore:
    store = FakeFolderStore()
    store.add_file("sheet-1", root_folder)
    return store


@pytest.fixture()
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture()
def ui() -> RecordingUI:
    return RecordingUI()


@pytest.fixture()
def make_services(folder_store: FakeFolderStore, document_store: FakeDocumentStore, ui: RecordingUI):
    """Build ExportServices around a FakeSheet; override any collaborator by keyword."""
    def _make(
        rows: list[list[Any]],
        selection: Selection | None = None,
        prompt: FakePrompt | None = None,
        **overrides: Any,
    ) -> ExportServices:
        sheet = overrides.pop("sheet", None) or FakeSheet(rows)
        parts: dict[str, Any] = dict(
            selection=overrides.pop("selection_source", None)
            or FakeSelectionSource(selection or Selection(start_row=2, num_rows=1, num_columns=2)),
            sheet=sheet,
            prompt=prompt or FakePrompt(PromptButton.OK, "Test Doc"),
            alerts=ui,
            folders=folder_store,
            documents=document_store,
            display=ui,
        )
        parts.update(overrides)
        return ExportServices(**parts)
    return _make


@pytest.fixture()
def fake_sheet_cls():
    return FakeSheet


@pytest.fixture()
def fake_prompt_cls():
    return FakePrompt


@pytest.fixture()
def fake_document_store_cls():
    return FakeDocumentStore
