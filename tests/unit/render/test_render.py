"""Tests for forest text rendering."""

from __future__ import annotations

import unittest

from pygments.token import Generic, Text

from changetree.change_tree_model import ChangedFile, build_for_mode
from changetree.render import TokenType, normalize_style, render_forest, status_token


def _records() -> list[ChangedFile]:
    return [
        ChangedFile("src/a.ts", "src/a.ts", "M"),
        ChangedFile("src/b.ts", "src/b.ts", "A"),
        ChangedFile("README.md", "README.md", None),
    ]


class RenderForestTests(unittest.TestCase):
    def test_render_nested_forest_without_color(self) -> None:
        root = build_for_mode(_records(), True, "Changes of Commit abc")

        text = render_forest([root], no_color=True)

        self.assertEqual(
            text,
            "Changes of Commit abc\n"
            "  src/\n"
            "    [M] a.ts\n"
            "    [A] b.ts\n"
            "  README.md\n",
        )

    def test_render_flat_forest_strips_trailing_label_padding(self) -> None:
        root = build_for_mode(_records(), False, "Focus")

        text = render_forest([root], no_color=True)

        self.assertIn("  [M] a.ts  •  src\n", text)
        self.assertIn("  README.md  •\n", text)

    def test_render_with_color_emits_ansi_escapes(self) -> None:
        root = build_for_mode(_records(), True, "Changes of Commit abc")

        text = render_forest([root], style="monokai")

        self.assertIn("\x1b[", text)
        self.assertIn("a.ts", text)

    def test_render_with_unknown_style_falls_back(self) -> None:
        self.assertEqual(normalize_style("definitely-not-a-style"), "monokai")
        root = build_for_mode(_records(), True, "Changes of Commit abc")

        text = render_forest([root], style="definitely-not-a-style")

        self.assertIn("README.md", text)

    def test_status_token_uses_first_letter(self) -> None:
        self.assertIs(status_token("A"), Generic.Inserted)
        self.assertIs(status_token("d"), Generic.Deleted)
        self.assertIs(status_token(None), Text)
        self.assertIs(status_token("X"), Generic.Output)

    def test_status_token_returns_pygments_token_types(self) -> None:
        for status in ("A", "D", "M", "R100", "C", "?", None):
            with self.subTest(status=status):
                self.assertIsInstance(status_token(status), TokenType)


if __name__ == "__main__":
    unittest.main()
