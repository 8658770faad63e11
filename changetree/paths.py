"""Repository-relative path helpers shared by tree build and transform code.

All paths handled here are POSIX-style strings relative to a repository root.
Backslashes are accepted on input and normalized to ``/``.
"""

from __future__ import annotations

import posixpath
import re

LABEL_SEPARATOR = "  •  "

_SEPARATOR_RE = re.compile(r"[\\/]")


def normalize_separators(path: str) -> str:
    """Return ``path`` with every backslash replaced by ``/``."""
    return path.replace("\\", "/")


def format_label(relative_path: str) -> str:
    """Format ``name  •  directory`` for a file shown outside its folder.

    The directory part is empty for files at the display root.
    """
    relative_path = normalize_separators(relative_path)
    name = posixpath.basename(relative_path)
    directory = posixpath.dirname(relative_path)
    if directory == ".":
        directory = ""
    return name + LABEL_SEPARATOR + directory


def split_segments(path: str) -> list[str]:
    """Split ``path`` on ``/`` or ``\\`` dropping empty segments."""
    return [segment for segment in _SEPARATOR_RE.split(path) if segment]


def join_segment(prefix: str, segment: str) -> str:
    """Append one path segment to a folder prefix (``""`` means the root)."""
    return f"{prefix}/{segment}" if prefix else segment


def relative_to(base: str, path: str) -> str:
    """Return ``path`` relative to ``base`` with ``/`` separators.

    An empty ``base`` denotes the repository root.
    """
    base = normalize_separators(base).strip("/") or "."
    path = normalize_separators(path).strip("/") or "."
    return posixpath.relpath(path, base)


def is_within(path: str, folder: str) -> bool:
    """Return whether ``path`` is ``folder`` itself or lies below it.

    Matching is segment-aware: ``src`` does not contain ``src2/file.ts``.
    """
    path = normalize_separators(path).strip("/")
    folder = normalize_separators(folder).strip("/")
    if folder in ("", "."):
        return True
    return path == folder or path.startswith(folder + "/")


__all__ = [
    "LABEL_SEPARATOR",
    "normalize_separators",
    "format_label",
    "split_segments",
    "join_segment",
    "relative_to",
    "is_within",
]
