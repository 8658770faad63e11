"""Host-facing orchestrator for the changed-files presentation forest.

Owns the forest of root folders for the current view context, rebuilds it from
externally supplied records, and applies per-folder flatten/nest toggles in
place. Listeners are told whether the whole forest or one subtree changed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .change_tree_model import (
    ChangedFile,
    ChangeNode,
    FileNode,
    FolderNode,
    build_focus_folder,
    build_for_mode,
    flatten_folder,
    nest_into,
)

logger = logging.getLogger(__name__)

ChangeListener = Callable[[FolderNode | None], None]


@dataclass(frozen=True)
class FilesViewContext:
    """Which refs (and optionally which path) the forest should describe.

    ``left_ref`` may be ``None``, meaning the parent of ``right_ref``.
    """

    left_ref: str | None = None
    right_ref: str | None = None
    specified_path: str | None = None


@dataclass(frozen=True)
class ChangeTreeDeps:
    """External collaborators required by :class:`ChangeTreeProvider`."""

    get_committed_files: Callable[[str | None, str], Sequence[ChangedFile]]
    get_relative_path: Callable[[str], str]
    is_directory: Callable[[str], bool]
    on_with_folder_changed: Callable[[bool], None] | None = None


@dataclass(frozen=True)
class TreeItem:
    """Display record for one node, consumed by rendering layers."""

    label: str
    kind: str
    collapsible: bool
    is_root: bool = False
    status: str | None = None
    path: str = ""


class ChangeTreeProvider:
    """Maintain the presentation forest and apply presentation toggles."""

    def __init__(
        self,
        deps: ChangeTreeDeps,
        *,
        with_folder: bool,
        context: FilesViewContext | None = None,
    ) -> None:
        self._deps = deps
        self._with_folder = with_folder
        self._context = context if context is not None else FilesViewContext()
        self._roots: list[FolderNode] = []
        self._listeners: list[ChangeListener] = []
        self._lock = threading.RLock()

    @property
    def with_folder(self) -> bool:
        return self._with_folder

    @property
    def context(self) -> FilesViewContext:
        return self._context

    def add_listener(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _fire(self, node: FolderNode | None = None) -> None:
        for listener in list(self._listeners):
            listener(node)

    def roots(self) -> list[FolderNode]:
        return list(self._roots)

    def children(self, node: ChangeNode | None = None) -> list[ChangeNode]:
        """Return top-level roots for ``None``, else subfolders then files."""
        if node is None:
            return self.roots()
        if isinstance(node, FolderNode):
            return [*node.folders, *node.files]
        return []

    def tree_item(self, node: ChangeNode) -> TreeItem:
        if isinstance(node, FileNode):
            return TreeItem(
                label=node.label,
                kind=node.kind,
                collapsible=False,
                status=node.status,
                path=node.repo_relative_path,
            )
        return TreeItem(
            label=node.label,
            kind=node.kind,
            collapsible=True,
            is_root=node.is_root,
            path=node.repo_relative_path,
        )

    def set_context(self, context: FilesViewContext) -> None:
        self._context = context
        self.update()

    def update(self) -> None:
        """Rebuild the forest for the current context and notify listeners.

        Collaborator failures propagate and leave the previous forest intact.
        """
        with self._lock:
            context = self._context
            if not context.right_ref:
                logger.debug("no right ref in context; clearing forest")
                self._roots = []
            else:
                records = list(self._deps.get_committed_files(context.left_ref, context.right_ref))
                roots = self._build_roots(records, context, self._with_folder)
                self._roots = roots
                logger.debug(
                    "rebuilt forest: %d roots, %d records, with_folder=%s",
                    len(roots),
                    len(records),
                    self._with_folder,
                )
        self._fire()

    def _build_roots(
        self,
        records: list[ChangedFile],
        context: FilesViewContext,
        with_folder: bool,
    ) -> list[FolderNode]:
        left_ref = context.left_ref
        right_ref = context.right_ref
        specified_path = context.specified_path
        if not specified_path:
            if left_ref:
                label = f"Diffs between {left_ref} and {right_ref}"
            else:
                label = f"Changes of Commit {right_ref}"
            return [build_for_mode(records, with_folder, label)]

        focus_label = f"{left_ref} .. {right_ref}" if left_ref else "Focus"
        focus = build_focus_folder(
            records,
            specified_path,
            self._deps.get_relative_path(specified_path),
            self._deps.is_directory(specified_path),
            with_folder,
            focus_label,
        )
        if left_ref:
            return [focus]
        return [focus, build_for_mode(records, with_folder, f"Changes of Commit {right_ref}")]

    def _set_default_mode(self, with_folder: bool) -> None:
        with self._lock:
            self._with_folder = with_folder
        if self._deps.on_with_folder_changed is not None:
            self._deps.on_with_folder_changed(with_folder)
        self.update()

    def show_files_with_folder(self, folder: FolderNode | None = None) -> None:
        """Nest ``folder`` in place, or switch every root to nested mode."""
        if folder is None:
            logger.debug("switching default mode to nested")
            self._set_default_mode(True)
            return
        with self._lock:
            nest_into(folder)
        logger.debug("nested folder %r", folder.repo_relative_path)
        self._fire(folder)

    def show_files_without_folder(self, folder: FolderNode | None = None) -> None:
        """Flatten ``folder`` in place, or switch every root to flat mode."""
        if folder is None:
            logger.debug("switching default mode to flat")
            self._set_default_mode(False)
            return
        with self._lock:
            flatten_folder(folder)
        logger.debug("flattened folder %r", folder.repo_relative_path)
        self._fire(folder)


__all__ = [
    "ChangeListener",
    "FilesViewContext",
    "ChangeTreeDeps",
    "TreeItem",
    "ChangeTreeProvider",
]
