"""Error taxonomy for archive loading, tree building, and search filtering."""

from __future__ import annotations


class ArchiveReadError(Exception):
    """Archive bytes could not be read or decoded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidPatternError(ValueError):
    """A search query could not be compiled as a regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class MissingParentWarning(UserWarning):
    """An entry's parent directory was not present in the node map."""

    def __init__(self, path: str, parent_path: str) -> None:
        super().__init__(f"parent {parent_path!r} missing for {path!r}")
        self.path = path
        self.parent_path = parent_path


__all__ = [
    "ArchiveReadError",
    "InvalidPatternError",
    "MissingParentWarning",
]
