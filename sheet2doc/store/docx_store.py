from __future__ import annotations

import logging
import shutil
from pathlib import Path

from docx import Document

from ..models.storage import DocHandle, Folder

"""Document store writing .docx files with python-docx.

- ``create_document`` saves an empty document into the drafts directory
- ``append_*`` edit the in-memory document; ``commit`` saves it
- ``move`` relocates the file into a folder; the handle follows the file
- ``url_of`` is the ``file://`` URI of the current location

Every call to ``create_document`` makes a new file: an existing name gets a
`` (n)`` suffix instead of being overwritten.
"""

logger = logging.getLogger(__name__)

DOCX_SUFFIX = ".docx"


def safe_file_name(title: str) -> str:
    """Title -> file stem usable on any platform."""
    cleaned = "".join("_" if ch in '/\\:*?"<>|' or ord(ch) < 32 else ch for ch in title)
    cleaned = cleaned.strip().strip(".")
    return cleaned or "Untitled"


def unique_path(directory: Path, stem: str, suffix: str = DOCX_SUFFIX) -> Path:
    candidate = directory / f"{stem}{suffix}"
    n = 1
    while candidate.exists():
        candidate = directory / f"{stem} ({n}){suffix}"
        n += 1
    return candidate


class DocxDocumentStore:
    def __init__(self, drafts_dir: Path, heading_level: int = 2) -> None:
        self.drafts_dir = drafts_dir
        self.heading_level = heading_level

    def create_document(self, title: str) -> DocHandle:
        self.drafts_dir.mkdir(parents=True, exist_ok=True)
        path = unique_path(self.drafts_dir, safe_file_name(title))
        document = Document()
        document.core_properties.title = title
        document.save(str(path))
        logger.debug(f"created {path}")
        return DocHandle(id=str(path), title=title, native=document)

    def append_heading(self, doc: DocHandle, text: str) -> None:
        doc.native.add_heading(text, level=self.heading_level)

    def append_paragraph(self, doc: DocHandle, text: str) -> None:
        doc.native.add_paragraph(text)

    def commit(self, doc: DocHandle) -> None:
        doc.native.save(doc.id)

    def move(self, doc: DocHandle, target: Folder) -> None:
        source = Path(doc.id)
        target_dir = Path(target.id)
        if source.parent.resolve() == target_dir.resolve():
            return
        destination = unique_path(target_dir, source.stem, source.suffix)
        shutil.move(str(source), str(destination))
        doc.id = str(destination)
        logger.debug(f"moved {source} -> {destination}")

    def url_of(self, doc: DocHandle) -> str:
        return Path(doc.id).resolve().as_uri()
