"""Domain datatypes for changed-file records and presentation-tree nodes."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from ..paths import normalize_separators

NODE_KIND_FILE = "file"
NODE_KIND_FOLDER = "folder"


@dataclass(frozen=True)
class ChangedFile:
    """One externally supplied changed-file record."""

    identifier: object
    relative_path: str
    status: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ChangedFile:
        """Build a record from a decoded JSON object.

        Accepts ``path`` or ``relative_path`` for the repository-relative path;
        ``identifier`` defaults to that path. Raises ``ValueError`` when the
        shape is not usable.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"changed-file record must be an object, got {type(data).__name__}")
        raw_path = data.get("relative_path", data.get("path"))
        if not isinstance(raw_path, str) or not raw_path.strip("/\\"):
            raise ValueError(f"changed-file record has no usable path: {dict(data)!r}")
        relative_path = normalize_separators(raw_path).strip("/")

        raw_status = data.get("status")
        if raw_status is not None and not isinstance(raw_status, str):
            raise ValueError(f"status must be a string, got {raw_status!r}")
        status = raw_status or None

        identifier = data.get("identifier", relative_path)
        return cls(identifier=identifier, relative_path=relative_path, status=status)


@dataclass(eq=False)
class FileNode:
    """Presentation node for one changed file.

    ``label`` is recomputed whenever the file is regrouped under another
    display root; ``repo_relative_path`` never changes.
    """

    identifier: object
    repo_relative_path: str
    status: str | None
    label: str
    kind: str = field(default=NODE_KIND_FILE, init=False)


@dataclass(eq=False)
class FolderNode:
    """Presentation node for one grouping level, including synthetic roots."""

    repo_relative_path: str
    label: str
    is_root: bool = False
    folders: list[FolderNode] = field(default_factory=list)
    files: list[FileNode] = field(default_factory=list)
    kind: str = field(default=NODE_KIND_FOLDER, init=False)

    def find_folder(self, label: str) -> FolderNode | None:
        """Return the direct child folder labeled ``label`` if present."""
        return next((folder for folder in self.folders if folder.label == label), None)


ChangeNode = FolderNode | FileNode


def walk_files(folder: FolderNode) -> Iterator[FileNode]:
    """Yield every file under ``folder``: own files first, then each subfolder."""
    yield from folder.files
    for child in folder.folders:
        yield from walk_files(child)


def count_files(folder: FolderNode) -> int:
    return sum(1 for _ in walk_files(folder))


__all__ = [
    "NODE_KIND_FILE",
    "NODE_KIND_FOLDER",
    "ChangedFile",
    "FileNode",
    "FolderNode",
    "ChangeNode",
    "walk_files",
    "count_files",
]
