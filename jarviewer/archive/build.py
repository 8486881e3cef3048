"""Archive tree construction from flat entry listings.

Builds a path -> node map, links children to parents, and collects the
package/class index in the same pass. Archives that list only leaf files get
their intermediate directories synthesized by a second, explicit pass.
"""

from __future__ import annotations

import locale
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .classify import classify, directory_prefixes, is_root_level, parent_key
from .errors import MissingParentWarning
from .types import DEFAULT_CLASS_EXTENSIONS, ArchiveNode

logger = logging.getLogger(__name__)

Entry = tuple[str, bool]


@dataclass
class ArchiveTree:
    """Entry map plus package/class index for one loaded archive.

    ``nodes`` is keyed by entry path only; the root lives in ``root`` so an entry
    whose path equals the archive path can never collide with it.
    """

    root_path: str
    display_name: str
    root: ArchiveNode
    nodes: dict[str, ArchiveNode]
    packages: tuple[ArchiveNode, ...] = ()
    classes: tuple[ArchiveNode, ...] = ()
    used_fallback: bool = False
    warnings: tuple[MissingParentWarning, ...] = field(default=())

    @classmethod
    def empty(cls, root_path: str, display_name: str) -> "ArchiveTree":
        """Return a tree containing only the archive root node."""
        root = _root_node(root_path, display_name)
        return cls(root_path=root_path, display_name=display_name, root=root, nodes={})

    def get(self, path: str) -> ArchiveNode | None:
        """Look up an entry by path, falling back to the root for the archive path."""
        node = self.nodes.get(path)
        if node is None and path == self.root_path:
            return self.root
        return node

    def __len__(self) -> int:
        return len(self.nodes) + 1

    def walk(self) -> Iterable[tuple[ArchiveNode, int]]:
        """Yield ``(node, depth)`` depth-first from the root in child order."""
        stack: list[tuple[ArchiveNode, int]] = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for child in reversed(node.children):
                stack.append((child, depth + 1))


def _root_node(root_path: str, display_name: str) -> ArchiveNode:
    return ArchiveNode(path=root_path, name=display_name, is_dir=True)


def _locale_sort_key(node: ArchiveNode) -> str:
    try:
        return locale.strxfrm(node.path)
    except (ValueError, OSError):
        return node.path


class _BuildPass:
    """State of one builder pass over an entry list."""

    def __init__(self, root_path: str, display_name: str, extensions: Sequence[str]) -> None:
        self.root = _root_node(root_path, display_name)
        self.nodes: dict[str, ArchiveNode] = {}
        self.packages: list[ArchiveNode] = []
        self.classes: list[ArchiveNode] = []
        self.orphans: list[MissingParentWarning] = []
        self.extensions = extensions

    def add(self, path: str, is_dir: bool) -> None:
        if not path or path in self.nodes:
            return
        classified = classify(path, is_dir, self.extensions)
        node = ArchiveNode(
            path=path,
            name=classified.name,
            is_dir=classified.is_dir,
            is_class_entry=classified.is_class_entry,
        )
        if node.is_class_entry:
            node.package_name = classified.package_candidate
        self.nodes[path] = node

        if is_root_level(path, is_dir):
            self.root.children.append(node)
            parent = self.root
        else:
            key = parent_key(path, is_dir)
            found = self.nodes.get(key)
            if found is None or not found.is_dir:
                del self.nodes[path]
                self.orphans.append(MissingParentWarning(path, key))
                return
            found.children.append(node)
            parent = found

        if node.is_class_entry:
            self.classes.append(node)
            self._mark_package(parent)

    def _mark_package(self, directory: ArchiveNode) -> None:
        if directory is self.root or directory.is_package:
            return
        directory.is_package = True
        directory.package_name = classify(directory.path, True, self.extensions).package_candidate
        self.packages.append(directory)


def _run_pass(
    entries: Iterable[Entry],
    root_path: str,
    display_name: str,
    extensions: Sequence[str],
) -> _BuildPass:
    state = _BuildPass(root_path, display_name, extensions)
    for path, is_dir in entries:
        state.add(path, bool(is_dir))
    return state


def _needs_fallback(state: _BuildPass, listing: Sequence[Entry]) -> bool:
    if not listing:
        return False
    if not state.root.children:
        return True
    return bool(state.orphans) and not any(is_dir for _path, is_dir in listing)


def synthesize_directories(entries: Sequence[Entry]) -> list[Entry]:
    """Return ``entries`` with every missing prefix directory inserted before its first use."""
    augmented: list[Entry] = []
    emitted: set[str] = set()
    for path, is_dir in entries:
        for prefix in directory_prefixes(path):
            if prefix in emitted:
                continue
            emitted.add(prefix)
            augmented.append((prefix, True))
        if is_dir and path in emitted:
            continue
        emitted.add(path)
        augmented.append((path, bool(is_dir)))
    return augmented


def build_archive_tree(
    entries: Iterable[Entry],
    root_path: str,
    display_name: str,
    class_extensions: Sequence[str] = DEFAULT_CLASS_EXTENSIONS,
) -> ArchiveTree:
    """Build the node map and package/class index for an archive listing.

    The first pass attaches each entry to its parent as listed. When that pass
    leaves the root without children, or orphans entries of a listing that has
    no directory records at all, prefix directories are synthesized from every
    entry path and the pass runs once more on the augmented list.
    """
    listing = [(path, bool(is_dir)) for path, is_dir in entries]
    state = _run_pass(listing, root_path, display_name, class_extensions)
    used_fallback = False
    if _needs_fallback(state, listing):
        logger.debug(
            "Incomplete tree for %s; rebuilding with synthesized directories (%d orphans)",
            display_name,
            len(state.orphans),
        )
        state = _run_pass(synthesize_directories(listing), root_path, display_name, class_extensions)
        used_fallback = True

    for warning in state.orphans:
        logger.debug("Dropping orphaned entry: %s", warning)

    return ArchiveTree(
        root_path=root_path,
        display_name=display_name,
        root=state.root,
        nodes=state.nodes,
        packages=tuple(sorted(state.packages, key=_locale_sort_key)),
        classes=tuple(state.classes),
        used_fallback=used_fallback,
        warnings=tuple(state.orphans),
    )
