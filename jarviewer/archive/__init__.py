"""Archive domain model: entry sources, path classification, and tree building.

This package contains non-UI primitives:
- node datatypes and search-mode constants
- pure path classification helpers
- two-phase tree builder with package/class index
- zip-backed entry source
"""

from __future__ import annotations

from .build import ArchiveTree, build_archive_tree, synthesize_directories
from .classify import (
    classify,
    directory_prefixes,
    entry_name,
    is_class_name,
    is_root_level,
    package_name_for,
    parent_key,
)
from .errors import ArchiveReadError, InvalidPatternError, MissingParentWarning
from .source import ZipArchiveSource, archive_display_name, normalize_archive_path
from .types import (
    DEFAULT_CLASS_EXTENSIONS,
    MODE_CLASSES,
    MODE_PACKAGES,
    SEARCH_MODES,
    ArchiveNode,
    ClassifiedPath,
)

__all__ = [
    "ArchiveNode",
    "ClassifiedPath",
    "DEFAULT_CLASS_EXTENSIONS",
    "MODE_PACKAGES",
    "MODE_CLASSES",
    "SEARCH_MODES",
    "classify",
    "entry_name",
    "is_class_name",
    "package_name_for",
    "is_root_level",
    "parent_key",
    "directory_prefixes",
    "ArchiveTree",
    "build_archive_tree",
    "synthesize_directories",
    "ArchiveReadError",
    "InvalidPatternError",
    "MissingParentWarning",
    "ZipArchiveSource",
    "archive_display_name",
    "normalize_archive_path",
]
