"""Tests for zip-backed archive entry sources."""

from __future__ import annotations

import os
import tempfile
import unittest
import zipfile
from pathlib import Path

from jarviewer.archive import ArchiveReadError, ZipArchiveSource, archive_display_name, normalize_archive_path


class ArchivePathTests(unittest.TestCase):
    def test_normalize_archive_path_uses_forward_slashes(self) -> None:
        self.assertEqual(normalize_archive_path("C:\\libs\\app.jar"), "C:/libs/app.jar")
        self.assertEqual(normalize_archive_path(Path("/tmp/app.jar")), "/tmp/app.jar")

    def test_display_name_is_last_segment(self) -> None:
        self.assertEqual(archive_display_name("C:/libs/app.jar"), "app.jar")
        self.assertEqual(archive_display_name("app.jar"), "app.jar")

    def test_display_name_for_empty_path(self) -> None:
        self.assertEqual(archive_display_name(""), "<error reading jar>")


class ZipArchiveSourceTests(unittest.TestCase):
    def test_entries_list_names_and_directory_flags_in_archive_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            jar = Path(tmp) / "app.jar"
            with zipfile.ZipFile(jar, "w") as archive:
                archive.writestr("a/", "")
                archive.writestr("a/b/C.class", b"\xca\xfe\xba\xbe")
                archive.writestr("a/D.txt", "hello")

            source = ZipArchiveSource(jar)

            self.assertEqual(source.display_name, "app.jar")
            self.assertEqual(
                source.entries(),
                [("a/", True), ("a/b/C.class", False), ("a/D.txt", False)],
            )
            self.assertEqual(source.read_bytes("a/D.txt"), b"hello")

    def test_root_identity_is_absolute_for_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            jar = Path(tmp) / "app.jar"
            with zipfile.ZipFile(jar, "w") as archive:
                archive.writestr("app.jar", "nested")

            previous_cwd = Path.cwd()
            try:
                os.chdir(tmp)
                source = ZipArchiveSource("app.jar")
            finally:
                os.chdir(previous_cwd)

            self.assertEqual(source.root_path, normalize_archive_path(jar.resolve()))
            self.assertEqual(source.display_name, "app.jar")
            self.assertNotEqual(source.root_path, "app.jar")

    def test_missing_entry_raises_archive_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            jar = Path(tmp) / "app.jar"
            with zipfile.ZipFile(jar, "w") as archive:
                archive.writestr("a.txt", "a")

            with self.assertRaises(ArchiveReadError):
                ZipArchiveSource(jar).read_bytes("missing.txt")

    def test_corrupt_archive_raises_archive_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            jar = Path(tmp) / "broken.jar"
            jar.write_bytes(b"not a zip file at all")

            with self.assertRaises(ArchiveReadError) as ctx:
                ZipArchiveSource(jar).entries()

            self.assertEqual(ctx.exception.path, ZipArchiveSource(jar).root_path)

    def test_missing_archive_raises_archive_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ArchiveReadError):
                ZipArchiveSource(Path(tmp) / "absent.jar").entries()


if __name__ == "__main__":
    unittest.main()
