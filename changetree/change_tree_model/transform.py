"""In-place flatten/nest transforms for already-built folder subtrees.

These are the only operations that rearrange ``folders``/``files`` after a tree
is built. Node objects are kept and relabeled rather than recreated, so hosts
keyed on node identity only need to refresh the transformed subtree.
"""

from __future__ import annotations

from ..paths import format_label, relative_to
from .build import add_file_with_folders
from .types import FileNode, FolderNode


def _relabel_for_root(target_root: FolderNode, file: FileNode) -> None:
    file.label = format_label(relative_to(target_root.repo_relative_path, file.repo_relative_path))


def flatten_into(target_root: FolderNode, subtree: FolderNode) -> None:
    """Move every file under ``subtree`` into ``target_root.files``.

    Each folder's own files are moved before its subfolders are visited.
    ``subtree`` is left empty; the caller drops it from its parent. Flattening
    a folder into itself is the same as :func:`flatten_folder`.
    """
    if subtree is target_root:
        flatten_folder(target_root)
        return
    for file in subtree.files:
        _relabel_for_root(target_root, file)
        target_root.files.append(file)
    for folder in subtree.folders:
        flatten_into(target_root, folder)
    subtree.files.clear()
    subtree.folders.clear()


def flatten_folder(folder: FolderNode) -> None:
    """Collapse ``folder`` so all descendant files sit directly inside it.

    Files from subfolders come first, in subfolder order, followed by the
    folder's own files; every label then shows the path below ``folder``.
    """
    own_files = list(folder.files)
    subfolders = list(folder.folders)
    folder.files.clear()
    folder.folders.clear()
    for subfolder in subfolders:
        flatten_into(folder, subfolder)
    for file in own_files:
        _relabel_for_root(folder, file)
        folder.files.append(file)


def nest_into(root: FolderNode) -> None:
    """Rebuild real folder levels below ``root`` from its direct files.

    Child folders are normalized first since they may hold flattened files of
    their own.
    """
    for folder in root.folders:
        nest_into(folder)
    files = list(root.files)
    root.files.clear()
    for file in files:
        add_file_with_folders(root, file)


__all__ = [
    "flatten_into",
    "flatten_folder",
    "nest_into",
]
