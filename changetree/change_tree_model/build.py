"""Presentation-tree construction from flat changed-file records."""

from __future__ import annotations

from collections.abc import Iterable

from ..paths import format_label, is_within, join_segment, normalize_separators, relative_to, split_segments
from .types import ChangedFile, FileNode, FolderNode


def create_file_node(record: ChangedFile) -> FileNode:
    """Create a flat-mode file node labeled with its full relative path."""
    return FileNode(
        identifier=record.identifier,
        repo_relative_path=record.relative_path,
        status=record.status,
        label=format_label(record.relative_path),
    )


def add_file_with_folders(root: FolderNode, file: FileNode) -> None:
    """Place ``file`` under ``root``, finding or creating each folder level.

    Segments are taken relative to ``root.repo_relative_path`` so folders
    created below a non-root folder get correctly prefixed paths. The file is
    relabeled with its final segment name.
    """
    segments = split_segments(relative_to(root.repo_relative_path, file.repo_relative_path))
    prefix = root.repo_relative_path
    parent = root
    for segment in segments[:-1]:
        prefix = join_segment(prefix, segment)
        folder = parent.find_folder(segment)
        if folder is None:
            folder = FolderNode(repo_relative_path=prefix, label=segment)
            parent.folders.append(folder)
        parent = folder
    file.label = segments[-1]
    parent.files.append(file)


def build_flat(records: Iterable[ChangedFile]) -> list[FileNode]:
    """Return one flat-mode file node per record, in input order."""
    return [create_file_node(record) for record in records]


def build_nested(records: Iterable[ChangedFile], root: FolderNode | None = None) -> FolderNode:
    """Build a nested folder hierarchy for ``records``.

    Folders appear in first-seen order. When ``root`` is omitted an anonymous
    folder with an empty path is used.
    """
    if root is None:
        root = FolderNode(repo_relative_path="", label="")
    for record in records:
        add_file_with_folders(root, create_file_node(record))
    return root


def build_for_mode(records: Iterable[ChangedFile], nested: bool, label: str) -> FolderNode:
    """Build a labeled root folder in nested or flattened presentation."""
    root = FolderNode(repo_relative_path="", label=label, is_root=True)
    if nested:
        build_nested(records, root)
    else:
        root.files.extend(build_flat(records))
    return root


def _identity_key(value: object) -> str:
    return normalize_separators(str(value)).casefold()


def find_record(
    records: Iterable[ChangedFile],
    identifier: object,
    relative_path: str,
) -> ChangedFile | None:
    """Find the record matching a focus target by identity or by path.

    Comparison is case-insensitive and ignores separator direction.
    """
    wanted_identifier = _identity_key(identifier)
    wanted_path = _identity_key(relative_path)
    for record in records:
        if _identity_key(record.identifier) == wanted_identifier:
            return record
        if _identity_key(record.relative_path) == wanted_path:
            return record
    return None


def filter_records_under(records: Iterable[ChangedFile], folder: str) -> list[ChangedFile]:
    """Keep records whose path is ``folder`` or lies below it."""
    return [record for record in records if is_within(record.relative_path, folder)]


def build_focus_folder(
    records: Iterable[ChangedFile],
    focus_identifier: object,
    focus_relative_path: str,
    focus_is_directory: bool,
    nested: bool,
    label: str,
) -> FolderNode:
    """Build a root folder scoped to one focused file or directory.

    A focused file always yields exactly one file node, even when it is not in
    the changed set (its status is then ``None``).
    """
    records = list(records)
    focus_relative_path = normalize_separators(focus_relative_path).strip("/")
    if focus_is_directory:
        return build_for_mode(filter_records_under(records, focus_relative_path), nested, label)

    root = FolderNode(repo_relative_path="", label=label, is_root=True)
    match = find_record(records, focus_identifier, focus_relative_path)
    root.files.append(
        FileNode(
            identifier=focus_identifier,
            repo_relative_path=focus_relative_path,
            status=match.status if match is not None else None,
            label=format_label(focus_relative_path),
        )
    )
    return root


__all__ = [
    "create_file_node",
    "add_file_with_folders",
    "build_flat",
    "build_nested",
    "build_for_mode",
    "find_record",
    "filter_records_under",
    "build_focus_folder",
]
