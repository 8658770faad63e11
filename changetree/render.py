"""Text rendering for change-tree forests.

Rows are produced as a Pygments token stream so colors follow the selected
Pygments style; ``no_color`` output is the same text without escapes.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pygments import format as pygments_format
from pygments.formatters import Terminal256Formatter
from pygments.styles import get_style_by_name
from pygments.token import Generic, Name, Punctuation, Text, Token
from pygments.util import ClassNotFound

from .change_tree_model import FolderNode

INDENT = "  "
FALLBACK_STYLE = "monokai"

TokenType = type(Token)

_STATUS_TOKENS: dict[str, TokenType] = {
    "A": Generic.Inserted,
    "D": Generic.Deleted,
    "M": Generic.Emph,
    "R": Generic.Subheading,
    "C": Generic.Subheading,
}


def status_token(status: str | None) -> TokenType:
    """Map a status code to the token used for its badge."""
    if not status:
        return Text
    return _STATUS_TOKENS.get(status[0].upper(), Generic.Output)


def normalize_style(style: str) -> str:
    """Return ``style`` if Pygments knows it, else the fallback style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return FALLBACK_STYLE
    return style


def iter_forest_tokens(roots: Sequence[FolderNode]) -> Iterator[tuple[TokenType, str]]:
    """Yield ``(token, text)`` pairs for every row of ``roots``."""

    def walk(folder: FolderNode, depth: int) -> Iterator[tuple[TokenType, str]]:
        for child in folder.folders:
            yield Text, INDENT * depth
            yield Name.Namespace, child.label
            yield Punctuation, "/\n"
            yield from walk(child, depth + 1)
        for file in folder.files:
            yield Text, INDENT * depth
            if file.status:
                yield status_token(file.status), f"[{file.status[0].upper()}]"
                yield Text, " "
            yield Name, file.label.rstrip()
            yield Text, "\n"

    for root in roots:
        yield Generic.Heading, root.label
        yield Text, "\n"
        yield from walk(root, 1)


def render_forest(roots: Sequence[FolderNode], style: str = FALLBACK_STYLE, no_color: bool = False) -> str:
    """Render ``roots`` as an indented text tree, colorized unless ``no_color``."""
    tokens = list(iter_forest_tokens(roots))
    if no_color:
        return "".join(text for _token, text in tokens)
    formatter = Terminal256Formatter(style=normalize_style(style))
    return pygments_format(tokens, formatter)


__all__ = [
    "INDENT",
    "TokenType",
    "status_token",
    "normalize_style",
    "iter_forest_tokens",
    "render_forest",
]
