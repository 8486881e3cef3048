"""Tests for terminal rendering of archive entry text."""

from __future__ import annotations

import unittest

from jarviewer.highlight import normalize_style, render_entry_text, sanitize_terminal_text


class EntryHighlightTests(unittest.TestCase):
    def test_sanitize_escapes_control_bytes(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x07b\n"), "a\\x07b\n")
        self.assertEqual(sanitize_terminal_text("plain\ttext\n"), "plain\ttext\n")

    def test_no_color_returns_sanitized_text(self) -> None:
        self.assertEqual(render_entry_text("x\x1b[2J", "a/b.txt", no_color=True), "x\\x1b[2J")

    def test_known_lexer_produces_ansi_output(self) -> None:
        rendered = render_entry_text("class A { int x = 1; }\n", "src/A.java")

        self.assertIn("\x1b[", rendered)
        self.assertIn("class", rendered)

    def test_unknown_extension_falls_back_to_plain_text_lexer(self) -> None:
        rendered = render_entry_text("Manifest-Version: 1.0\n", "META-INF/UNKNOWN.zzz-ext")

        self.assertIn("Manifest-Version: 1.0", rendered)

    def test_unknown_style_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_style("definitely-not-a-style"), "monokai")
        self.assertEqual(normalize_style("monokai"), "monokai")


if __name__ == "__main__":
    unittest.main()
