"""Search exports for package/class filtering over archive indexes."""

from __future__ import annotations

from .filtering import ArchiveSearch, FilterView, compile_query, query_matcher

__all__ = [
    "ArchiveSearch",
    "FilterView",
    "compile_query",
    "query_matcher",
]
