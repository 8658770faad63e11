"""Domain model for changed-file presentation trees.

This package contains non-UI tree primitives:
- changed-file records and file/folder node datatypes
- nested and flattened tree builders, including focus-scoped roots
- in-place flatten/nest transforms for already-built subtrees
"""

from __future__ import annotations

from .types import (
    NODE_KIND_FILE,
    NODE_KIND_FOLDER,
    ChangedFile,
    ChangeNode,
    FileNode,
    FolderNode,
    count_files,
    walk_files,
)
from .build import (
    add_file_with_folders,
    build_flat,
    build_focus_folder,
    build_for_mode,
    build_nested,
    create_file_node,
    filter_records_under,
    find_record,
)
from .transform import flatten_folder, flatten_into, nest_into

__all__ = [
    "NODE_KIND_FILE",
    "NODE_KIND_FOLDER",
    "ChangedFile",
    "ChangeNode",
    "FileNode",
    "FolderNode",
    "count_files",
    "walk_files",
    "add_file_with_folders",
    "build_flat",
    "build_focus_folder",
    "build_for_mode",
    "build_nested",
    "create_file_node",
    "filter_records_under",
    "find_record",
    "flatten_folder",
    "flatten_into",
    "nest_into",
]
