from __future__ import annotations

from pathlib import Path

from ..models.storage import Folder

"""Folder store backed by the local file system.

Folders are directories and their ``id`` is the directory path. Name matching
is literal (``==`` on directory entry names) so it stays case-sensitive even
on case-insensitive file systems.
"""


def _folder(path: Path) -> Folder:
    return Folder(id=str(path), name=path.name)


class LocalFolderStore:
    def parent_of(self, file_id: str) -> Folder | None:
        path = Path(file_id).resolve()
        parent = path.parent
        if parent == path:
            return None
        return _folder(parent)

    def find_child_by_name(self, folder: Folder, name: str) -> Folder | None:
        for entry in Path(folder.id).iterdir():
            if entry.is_dir() and entry.name == name:
                return _folder(entry)
        return None

    def create_child(self, folder: Folder, name: str) -> Folder:
        path = Path(folder.id) / name
        path.mkdir(exist_ok=False)
        return _folder(path)
