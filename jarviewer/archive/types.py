"""Archive tree datatypes shared by builder, search, and listing modules."""

from __future__ import annotations

from dataclasses import dataclass, field

PATH_DELIMITER = "/"
PACKAGE_DELIMITER = "."
DEFAULT_CLASS_EXTENSIONS: tuple[str, ...] = (".class",)

MODE_PACKAGES = "packages"
MODE_CLASSES = "classes"
SEARCH_MODES: tuple[str, ...] = (MODE_PACKAGES, MODE_CLASSES)


@dataclass(frozen=True)
class ClassifiedPath:
    """Name and flags derived from one archive path."""

    name: str
    is_dir: bool
    is_class_entry: bool
    package_candidate: str


@dataclass(eq=False)
class ArchiveNode:
    """One file or directory inside an archive.

    ``children`` keeps source insertion order. Nodes compare by identity so the
    search views can be checked against the baseline element by element.
    """

    path: str
    name: str
    is_dir: bool
    is_class_entry: bool = False
    is_package: bool = False
    package_name: str | None = None
    children: list["ArchiveNode"] = field(default_factory=list)

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"ArchiveNode({self.path!r}, {kind}, children={len(self.children)})"


__all__ = [
    "PATH_DELIMITER",
    "PACKAGE_DELIMITER",
    "DEFAULT_CLASS_EXTENSIONS",
    "MODE_PACKAGES",
    "MODE_CLASSES",
    "SEARCH_MODES",
    "ClassifiedPath",
    "ArchiveNode",
]
