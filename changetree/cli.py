"""Command-line front door for changetree.

Reads changed-file records as JSON, builds the presentation forest for the
requested refs and focus path, applies optional folder toggles, and prints it.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .change_tree_model import ChangedFile, FolderNode, filter_records_under
from .config import load_style, load_with_folder, save_with_folder
from .paths import normalize_separators
from .provider import ChangeTreeDeps, ChangeTreeProvider, FilesViewContext
from .render import render_forest

logger = logging.getLogger(__name__)


def load_records(source: str) -> list[ChangedFile]:
    """Load records from a JSON file path, or from stdin when ``source`` is ``-``.

    Raises ``SystemExit`` with a readable message on unreadable or malformed
    input.
    """
    try:
        if source == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Cannot read records from {source}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {source}: {exc}") from exc
    if not isinstance(data, list):
        raise SystemExit(f"Expected a JSON array of records in {source}.")

    try:
        records = [ChangedFile.from_mapping(item) for item in data]
    except ValueError as exc:
        raise SystemExit(f"Invalid record in {source}: {exc}") from exc
    logger.debug("loaded %d records from %s", len(records), source)
    return records


def focus_is_directory(records: list[ChangedFile], focus_path: str, focus_kind: str) -> bool:
    """Classify the focus path; ``auto`` means directory when records live below it."""
    if focus_kind != "auto":
        return focus_kind == "dir"
    focus = normalize_separators(focus_path).strip("/")
    return any(record.relative_path != focus for record in filter_records_under(records, focus))


def find_folder(roots: list[FolderNode], repo_relative_path: str) -> FolderNode | None:
    """Return the first non-root folder with ``repo_relative_path`` in tree order."""
    wanted = normalize_separators(repo_relative_path).strip("/")

    def walk(folder: FolderNode) -> FolderNode | None:
        for child in folder.folders:
            if child.repo_relative_path == wanted:
                return child
            found = walk(child)
            if found is not None:
                return found
        return None

    for root in roots:
        if not wanted:
            return root
        found = walk(root)
        if found is not None:
            return found
    return None


def build_provider(args: argparse.Namespace, records: list[ChangedFile]) -> ChangeTreeProvider:
    with_folder = load_with_folder() if args.with_folder is None else args.with_folder

    def get_committed_files(_left_ref: str | None, _right_ref: str) -> list[ChangedFile]:
        return records

    deps = ChangeTreeDeps(
        get_committed_files=get_committed_files,
        get_relative_path=lambda path: normalize_separators(path).strip("/"),
        is_directory=lambda path: focus_is_directory(records, path, args.focus_kind),
        on_with_folder_changed=save_with_folder if args.remember else None,
    )
    return ChangeTreeProvider(deps, with_folder=with_folder)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, build the forest, and print it to stdout."""
    parser = argparse.ArgumentParser(
        description="Show changed files as a nested folder tree or a flat list."
    )
    parser.add_argument("records", help="JSON file with changed-file records, or - for stdin.")
    parser.add_argument("--left-ref", default=None, help="Left ref of a comparison (omit for a single commit).")
    parser.add_argument("--right-ref", default="HEAD", help="Commit or right ref (default: HEAD).")
    parser.add_argument("--focus", default=None, metavar="PATH", help="Repository-relative path to focus on.")
    parser.add_argument(
        "--focus-kind",
        choices=("auto", "file", "dir"),
        default="auto",
        help="Whether --focus names a file or a directory (default: auto).",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--nested", dest="with_folder", action="store_const", const=True, help="Show real folders.")
    mode.add_argument("--flat", dest="with_folder", action="store_const", const=False, help="Show files only.")
    parser.set_defaults(with_folder=None)
    parser.add_argument("--remember", action="store_true", help="Persist --nested/--flat as the default mode.")
    parser.add_argument("--flatten", action="append", default=[], metavar="FOLDER", help="Flatten one folder in place.")
    parser.add_argument("--nest", action="append", default=[], metavar="FOLDER", help="Nest one folder in place.")
    parser.add_argument("--style", default=None, help="Pygments style name for colors.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    records = load_records(args.records)
    provider = build_provider(args, records)
    if args.remember and args.with_folder is not None:
        save_with_folder(args.with_folder)
    provider.set_context(FilesViewContext(args.left_ref, args.right_ref, args.focus))

    for folder_path in args.flatten:
        folder = find_folder(provider.roots(), folder_path)
        if folder is None:
            raise SystemExit(f"Folder not found in tree: {folder_path}")
        provider.show_files_without_folder(folder)
    for folder_path in args.nest:
        folder = find_folder(provider.roots(), folder_path)
        if folder is None:
            raise SystemExit(f"Folder not found in tree: {folder_path}")
        provider.show_files_with_folder(folder)

    style = args.style or load_style()
    no_color = args.no_color or not sys.stdout.isatty()
    sys.stdout.write(render_forest(provider.roots(), style, no_color))


if __name__ == "__main__":
    main()
