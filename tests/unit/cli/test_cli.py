"""CLI tests for record loading, focus classification, and rendering."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from changetree import cli, config
from changetree.change_tree_model import ChangedFile

RECORDS = [
    {"path": "src/a.ts", "status": "M"},
    {"path": "src/b.ts", "status": "A"},
    {"path": "README.md", "status": "D"},
]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.records_path = self.tmp / "records.json"
        self.records_path.write_text(json.dumps(RECORDS), encoding="utf-8")
        self.config_path = self.tmp / "changetree.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _run(self, *argv: str) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main([str(self.records_path), *argv])
        return stdout.getvalue()

    def test_default_render_is_nested_commit_view(self) -> None:
        output = self._run("--right-ref", "abc")

        self.assertEqual(
            output,
            "Changes of Commit abc\n"
            "  src/\n"
            "    [M] a.ts\n"
            "    [A] b.ts\n"
            "  [D] README.md\n",
        )

    def test_flat_diff_view(self) -> None:
        output = self._run("--flat", "--left-ref", "main", "--right-ref", "topic")

        self.assertTrue(output.startswith("Diffs between main and topic\n"))
        self.assertIn("  [M] a.ts  •  src\n", output)

    def test_focus_on_directory_adds_focus_root(self) -> None:
        output = self._run("--focus", "src")

        focus, commit = output.split("Changes of Commit HEAD\n")
        self.assertTrue(focus.startswith("Focus\n"))
        self.assertNotIn("README.md", focus)
        self.assertIn("README.md", commit)

    def test_focus_on_unchanged_file_has_no_badge(self) -> None:
        output = self._run("--focus", "docs/readme2.md", "--left-ref", "a", "--right-ref", "b")

        self.assertEqual(output, "a .. b\n  readme2.md  •  docs\n")

    def test_flatten_folder_option_applies_in_place_toggle(self) -> None:
        output = self._run("--flatten", "src")

        self.assertIn("  src/\n    [M] a.ts  •\n    [A] b.ts  •\n", output)

    def test_unknown_folder_toggle_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self._run("--flatten", "nope")

    def test_remember_persists_mode(self) -> None:
        self._run("--flat", "--remember")

        self.assertFalse(config.load_with_folder())
        output = self._run()
        self.assertNotIn("src/\n", output)

    def test_malformed_records_exit_with_message(self) -> None:
        self.records_path.write_text(json.dumps([{"status": "M"}]), encoding="utf-8")

        with self.assertRaises(SystemExit) as ctx:
            self._run()

        self.assertIn("Invalid record", str(ctx.exception))

    def test_non_array_json_exits(self) -> None:
        self.records_path.write_text(json.dumps({"path": "a"}), encoding="utf-8")

        with self.assertRaises(SystemExit):
            self._run()

    def test_records_from_stdin(self) -> None:
        with mock.patch("sys.stdin", io.StringIO(json.dumps(RECORDS))):
            records = cli.load_records("-")

        self.assertEqual([record.relative_path for record in records], ["src/a.ts", "src/b.ts", "README.md"])


class FocusKindTests(unittest.TestCase):
    def test_auto_focus_kind_detects_directories_by_records(self) -> None:
        records = [ChangedFile("src/a.ts", "src/a.ts", "M")]

        self.assertTrue(cli.focus_is_directory(records, "src", "auto"))
        self.assertFalse(cli.focus_is_directory(records, "src/a.ts", "auto"))
        self.assertFalse(cli.focus_is_directory(records, "sr", "auto"))
        self.assertTrue(cli.focus_is_directory(records, "anything", "dir"))
        self.assertFalse(cli.focus_is_directory(records, "src", "file"))


if __name__ == "__main__":
    unittest.main()
