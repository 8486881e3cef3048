"""Entry listing and byte access for zip-format archives (jar, war, zip)."""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path

from .errors import ArchiveReadError
from .types import PATH_DELIMITER

logger = logging.getLogger(__name__)

UNREADABLE_DISPLAY_NAME = "<error reading jar>"


def normalize_archive_path(path: str | os.PathLike[str]) -> str:
    """Return the archive root identity: host path with ``/`` separators."""
    return os.fspath(path).replace("\\", PATH_DELIMITER)


def archive_display_name(root_path: str) -> str:
    """Return the last non-empty segment of a normalized archive path."""
    parts = [part for part in root_path.split(PATH_DELIMITER) if part]
    if not parts:
        return UNREADABLE_DISPLAY_NAME
    return parts[-1]


class ZipArchiveSource:
    """Read-only view over one archive file on disk.

    Entries are listed in archive order as ``(name, is_dir)`` pairs. The root
    identity is the absolute archive path, distinct from any root-level entry
    named like the archive file. The
    underlying ``ZipFile`` is opened per call, so a source holds no handle
    between operations.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self.root_path = normalize_archive_path(Path(path).resolve())
        self.display_name = archive_display_name(self.root_path)

    def __repr__(self) -> str:
        return f"ZipArchiveSource({self.root_path!r})"

    def _open(self) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(self.path, "r")
        except (zipfile.BadZipFile, OSError) as exc:
            raise ArchiveReadError(f"Failed to read archive {self.display_name}: {exc}", self.root_path) from exc

    def entries(self) -> list[tuple[str, bool]]:
        """List ``(name, is_dir)`` for every entry in the archive."""
        with self._open() as archive:
            listing = [(info.filename, info.is_dir()) for info in archive.infolist()]
        logger.debug("Listed %d entries from %s", len(listing), self.root_path)
        return listing

    def read_bytes(self, file_path: str) -> bytes:
        """Return the decompressed bytes of ``file_path``."""
        with self._open() as archive:
            try:
                return archive.read(file_path)
            except KeyError as exc:
                raise ArchiveReadError(f"No entry named {file_path!r} in {self.display_name}", self.root_path) from exc
            except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, OSError) as exc:
                raise ArchiveReadError(f"Failed to read {file_path!r} from {self.display_name}: {exc}", self.root_path) from exc
