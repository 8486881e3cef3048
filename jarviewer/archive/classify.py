"""Pure helpers deriving names, flags, and dotted package names from archive paths."""

from __future__ import annotations

from collections.abc import Iterable

from .types import DEFAULT_CLASS_EXTENSIONS, PACKAGE_DELIMITER, PATH_DELIMITER, ClassifiedPath


def entry_name(path: str, is_dir: bool) -> str:
    """Return the final segment of ``path``.

    Directory paths end with the delimiter, so their name is the segment
    before the trailing empty token. Malformed directory paths yield ``""``.
    """
    parts = path.split(PATH_DELIMITER)
    if is_dir:
        return parts[-2] if len(parts) >= 2 else ""
    return parts[-1]


def package_name_for(path: str) -> str:
    """Render ``path`` with dots instead of slashes, minus one trailing dot."""
    dotted = path.replace(PATH_DELIMITER, PACKAGE_DELIMITER)
    if dotted.endswith(PACKAGE_DELIMITER):
        dotted = dotted[:-1]
    return dotted


def normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    """Normalize ``class`` / ``.class`` spellings to bare extension tokens."""
    normalized: list[str] = []
    for raw in extensions:
        token = str(raw).strip().lstrip(".")
        if token and token not in normalized:
            normalized.append(token)
    return tuple(normalized)


def is_class_name(name: str, extensions: Iterable[str] = DEFAULT_CLASS_EXTENSIONS) -> bool:
    """Return whether ``name``'s last dot-delimited token is a compiled-unit extension."""
    if PACKAGE_DELIMITER not in name:
        return False
    return name.rsplit(PACKAGE_DELIMITER, 1)[1] in normalize_extensions(extensions)


def classify(
    path: str,
    is_dir: bool,
    extensions: Iterable[str] = DEFAULT_CLASS_EXTENSIONS,
) -> ClassifiedPath:
    """Classify one archive entry path.

    ``package_candidate`` is always filled in; the builder only assigns it to a
    node for class entries and for directories it marks as packages.
    """
    name = entry_name(path, is_dir)
    return ClassifiedPath(
        name=name,
        is_dir=is_dir,
        is_class_entry=(not is_dir) and is_class_name(name, extensions),
        package_candidate=package_name_for(path),
    )


def path_segments(path: str) -> list[str]:
    """Return the non-empty segments of ``path``."""
    return [part for part in path.split(PATH_DELIMITER) if part]


def is_root_level(path: str, is_dir: bool) -> bool:
    """Return whether an entry attaches directly to the archive root."""
    if is_dir:
        return len(path_segments(path)) == 1
    return PATH_DELIMITER not in path


def parent_key(path: str, is_dir: bool) -> str:
    """Return the node-map key of ``path``'s parent directory."""
    parts = path.split(PATH_DELIMITER)
    drop = 2 if is_dir else 1
    return PATH_DELIMITER.join(parts[:-drop]) + PATH_DELIMITER


def directory_prefixes(path: str) -> list[str]:
    """Return every proper prefix directory of ``path``, shallowest first.

    ``a/b/c/File.ext`` yields ``["a/", "a/b/", "a/b/c/"]``.
    """
    segments = path_segments(path)[:-1]
    prefixes: list[str] = []
    for count in range(1, len(segments) + 1):
        prefixes.append(PATH_DELIMITER.join(segments[:count]) + PATH_DELIMITER)
    return prefixes
