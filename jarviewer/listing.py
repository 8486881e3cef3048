"""Lazy listing facade consumed by UI bindings.

``ArchiveBrowser`` owns the source, tree, and search state for one selected
archive and turns nodes into plain ``DisplayRecord`` values. UI layers ask
for children one level at a time and open files through ``open_file``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from .archive.build import ArchiveTree, build_archive_tree
from .archive.errors import ArchiveReadError
from .archive.types import DEFAULT_CLASS_EXTENSIONS, MODE_CLASSES, MODE_PACKAGES, ArchiveNode
from .search.filtering import ArchiveSearch

logger = logging.getLogger(__name__)


class ArchiveSource(Protocol):
    root_path: str
    display_name: str

    def entries(self) -> list[tuple[str, bool]]: ...

    def read_bytes(self, file_path: str) -> bytes: ...


@dataclass(frozen=True)
class OpenAction:
    """Context needed to open one file entry later."""

    file_path: str
    archive: ArchiveSource
    archive_display_name: str
    archive_root_path: str


@dataclass(frozen=True)
class DisplayRecord:
    """One UI-ready row: expandable for directories, openable for files."""

    label: str
    path: str
    expandable: bool
    open_action: OpenAction | None = None
    is_class_entry: bool = False

    @property
    def shows_signature(self) -> bool:
        """Whether the "show type signature" action applies to this row."""
        return self.is_class_entry


@dataclass(frozen=True)
class OpenedFile:
    """Result of one open request."""

    file_path: str
    archive_display_name: str
    text: str
    is_class_entry: bool = False


def decode_entry_text(data: bytes) -> str:
    """Decode entry bytes as UTF-8 (dropping a leading BOM), else as latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


class ArchiveBrowser:
    """Tree, index, and search state for the currently selected archive."""

    def __init__(
        self,
        source: ArchiveSource,
        class_extensions: Sequence[str] = DEFAULT_CLASS_EXTENSIONS,
        search_mode: str = MODE_PACKAGES,
    ) -> None:
        self.source = source
        self.class_extensions = tuple(class_extensions)
        self.tree = ArchiveTree.empty(source.root_path, source.display_name)
        self.search = ArchiveSearch(self.tree, search_mode)
        self.load_error: str | None = None
        self._open_listeners: list[Callable[[OpenedFile], None]] = []

    @property
    def display_name(self) -> str:
        return self.tree.display_name

    def load(self) -> ArchiveTree:
        """Read the archive listing and rebuild tree, index, and search state.

        On ``ArchiveReadError`` the tree is left holding only the root node and
        the error is re-raised for the caller to report.
        """
        mode = self.search.mode
        self.tree = ArchiveTree.empty(self.source.root_path, self.source.display_name)
        self.search = ArchiveSearch(self.tree, mode)
        try:
            entries = self.source.entries()
        except ArchiveReadError as exc:
            self.load_error = str(exc)
            logger.error("Failed to parse archive: %s", exc)
            raise
        self.load_error = None
        self.tree = build_archive_tree(
            entries,
            self.source.root_path,
            self.source.display_name,
            self.class_extensions,
        )
        self.search = ArchiveSearch(self.tree, mode)
        logger.info(
            "Loaded %s: %d nodes, %d packages, %d classes",
            self.display_name,
            len(self.tree),
            len(self.tree.packages),
            len(self.tree.classes),
        )
        return self.tree

    def root_record(self) -> DisplayRecord:
        return DisplayRecord(label=self.tree.display_name, path=self.tree.root_path, expandable=True)

    def resolve(self, ref: DisplayRecord | str) -> ArchiveNode | None:
        """Resolve a record (or raw path/label) to its node.

        A reference labelled with the archive display name is the root alias;
        anything else is looked up by path.
        """
        if isinstance(ref, DisplayRecord):
            if ref.label == self.tree.display_name and ref.path == self.tree.root_path:
                return self.tree.root
            return self.tree.get(ref.path)
        if ref == self.tree.display_name:
            return self.tree.root
        return self.tree.get(ref)

    def record_for(self, node: ArchiveNode) -> DisplayRecord:
        if node is self.tree.root:
            return self.root_record()
        if node.is_dir:
            return DisplayRecord(label=node.name, path=node.path, expandable=True)
        return DisplayRecord(
            label=node.name,
            path=node.path,
            expandable=False,
            open_action=OpenAction(
                file_path=node.path,
                archive=self.source,
                archive_display_name=self.tree.display_name,
                archive_root_path=self.tree.root_path,
            ),
            is_class_entry=node.is_class_entry,
        )

    def list_children(self, ref: DisplayRecord | str | None = None, filtered: bool = False) -> list[DisplayRecord]:
        """Return display records one level below ``ref`` (the root record when omitted).

        With ``filtered`` set the caller is rendering search results:
        directories are not expanded structurally, only class entries surface.
        """
        if ref is None:
            return [self.root_record()]
        node = self.resolve(ref)
        if node is None:
            return []
        if filtered:
            return [self.record_for(child) for child in node.children if child.is_class_entry]
        return [self.record_for(child) for child in node.children]

    def search_records(self, mode: str | None = None) -> list[DisplayRecord]:
        """Render the current search view as records.

        Packages are expandable to their class entries; classes are leaves.
        """
        view = self.search.select_mode(self.search.mode if mode is None else mode)
        records: list[DisplayRecord] = []
        for node in view.view:
            if self.search.mode == MODE_CLASSES:
                records.append(replace(self.record_for(node), label=node.package_name or node.name))
            else:
                records.append(DisplayRecord(label=node.package_name or node.name, path=node.path, expandable=True))
        return records

    def provide_content(self, file_path: str) -> str:
        """Return the decoded text of one archive entry."""
        return decode_entry_text(self.source.read_bytes(file_path))

    def on_open(self, listener: Callable[[OpenedFile], None]) -> Callable[[], None]:
        """Register ``listener`` for opened files; returns an unsubscribe callable."""
        self._open_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._open_listeners:
                self._open_listeners.remove(listener)

        return unsubscribe

    def open_file(self, target: OpenAction | DisplayRecord | str) -> OpenedFile:
        """Read one file entry, notify open listeners, and return the result."""
        if isinstance(target, DisplayRecord):
            if target.open_action is None:
                raise ArchiveReadError(f"{target.path!r} is not a file entry", self.tree.root_path)
            target = target.open_action
        if isinstance(target, OpenAction):
            archive = target.archive
            file_path = target.file_path
        else:
            archive = self.source
            file_path = target

        node = self.tree.get(file_path)
        if node is not None and node.is_dir:
            raise ArchiveReadError(f"{file_path!r} is a directory", self.tree.root_path)

        logger.debug("Opening %s", file_path)
        try:
            text = decode_entry_text(archive.read_bytes(file_path))
        except ArchiveReadError as exc:
            logger.error("Could not open file: %s", exc)
            raise
        opened = OpenedFile(
            file_path=file_path,
            archive_display_name=self.tree.display_name,
            text=text,
            is_class_entry=bool(node is not None and node.is_class_entry),
        )
        for listener in list(self._open_listeners):
            listener(opened)
        return opened
