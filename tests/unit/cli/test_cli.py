"""CLI command behavior tests.

Verifies how ``jarviewer.cli.main`` loads archives and renders each command.
"""

from __future__ import annotations

import io
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest import mock

from jarviewer import cli


def _write_jar(path: Path, with_dirs: bool = True) -> None:
    with zipfile.ZipFile(path, "w") as archive:
        if with_dirs:
            archive.writestr("a/", "")
            archive.writestr("a/b/", "")
        archive.writestr("a/b/C.class", b"\xca\xfe\xba\xbe")
        archive.writestr("a/D.txt", "hello\n")


class CliCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.jar = self.tmp / "app.jar"
        _write_jar(self.jar)
        config_patch = mock.patch("jarviewer.config.CONFIG_PATH", self.tmp / "config.json")
        config_patch.start()
        self.addCleanup(config_patch.stop)
        self.addCleanup(self._tmp.cleanup)

    def run_cli(self, *argv: str) -> str:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout):
            cli.main([str(self.jar), *argv])
        return stdout.getvalue()

    def test_ls_without_path_prints_root_record(self) -> None:
        self.assertEqual(self.run_cli("ls"), "app.jar/\n")

    def test_ls_root_and_nested_directory(self) -> None:
        self.assertEqual(self.run_cli("ls", "/"), "a/\n")
        self.assertEqual(self.run_cli("ls", "a"), "b/\nD.txt\n")
        self.assertEqual(self.run_cli("ls", "a/b/"), "C.class  [class]\n")

    def test_ls_unknown_path_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self.run_cli("ls", "nope")

    def test_tree_prints_depth_first(self) -> None:
        self.assertEqual(
            self.run_cli("tree"),
            "app.jar/\n  a/\n    b/\n      C.class  [class]\n    D.txt\n",
        )

    def test_tree_of_archive_without_directory_records(self) -> None:
        _write_jar(self.jar, with_dirs=False)

        self.assertEqual(
            self.run_cli("tree"),
            "app.jar/\n  a/\n    b/\n      C.class  [class]\n    D.txt\n",
        )

    def test_search_packages_and_classes(self) -> None:
        self.assertEqual(self.run_cli("search", "a"), "a.b\n")
        self.assertEqual(self.run_cli("search", "--classes", r"C\.class$", "--regex"), "a.b.C.class\n")

    def test_search_mode_is_persisted(self) -> None:
        self.run_cli("search", "--classes", "C")

        self.assertEqual(self.run_cli("search", "b"), "a.b.C.class\n")

    def test_invalid_regex_prints_nothing(self) -> None:
        stderr = io.StringIO()
        with mock.patch("sys.stderr", stderr):
            output = self.run_cli("search", "(", "--regex")

        self.assertEqual(output, "")
        self.assertIn("invalid pattern", stderr.getvalue())

    def test_show_prints_entry_text(self) -> None:
        self.assertEqual(self.run_cli("--no-color", "show", "a/D.txt"), "hello\n")

    def test_show_missing_entry_exits(self) -> None:
        with self.assertRaises(SystemExit):
            self.run_cli("show", "a/missing.txt")

    def test_corrupt_archive_exits_with_message(self) -> None:
        self.jar.write_bytes(b"garbage")

        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("tree")

        self.assertIn("app.jar", str(ctx.exception.code))

    def test_missing_archive_exits(self) -> None:
        with self.assertRaises(SystemExit):
            cli.main([str(self.tmp / "absent.jar"), "tree"])


if __name__ == "__main__":
    unittest.main()
