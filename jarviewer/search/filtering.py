"""Package/class search over a built archive index.

A ``FilterView`` owns one immutable baseline and exposes a current view that
is replaced wholesale on every ``filter``/``reset`` call. ``ArchiveSearch``
holds one view per search mode and resets a mode's view when it is selected.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from ..archive.build import ArchiveTree
from ..archive.errors import InvalidPatternError
from ..archive.types import MODE_CLASSES, MODE_PACKAGES, SEARCH_MODES, ArchiveNode

logger = logging.getLogger(__name__)


def compile_query(query: str) -> re.Pattern[str]:
    """Compile ``query`` as a regular expression or raise ``InvalidPatternError``."""
    try:
        return re.compile(query)
    except re.error as exc:
        raise InvalidPatternError(query, str(exc)) from exc


def query_matcher(query: str, is_regex: bool) -> Callable[[str], bool]:
    """Return a predicate testing package names against ``query``.

    Regex queries match anywhere in the name (``search`` semantics).
    """
    if is_regex:
        pattern = compile_query(query)
        return lambda name: pattern.search(name) is not None
    return lambda name: query in name


class FilterView:
    """Baseline node list plus the currently exposed, possibly filtered, view."""

    def __init__(self, baseline: Sequence[ArchiveNode]) -> None:
        self._baseline: tuple[ArchiveNode, ...] = tuple(baseline)
        self._view: tuple[ArchiveNode, ...] = self._baseline
        self.last_error: str | None = None

    @property
    def baseline(self) -> tuple[ArchiveNode, ...]:
        return self._baseline

    @property
    def view(self) -> tuple[ArchiveNode, ...]:
        return self._view

    @property
    def is_filtered(self) -> bool:
        return self._view is not self._baseline

    def filter(self, query: str, is_regex: bool = False) -> None:
        """Replace the view with baseline nodes whose package name matches ``query``.

        An invalid regular expression empties the view and is logged; it is
        never raised to the caller.
        """
        try:
            matches = query_matcher(query, is_regex)
        except InvalidPatternError as exc:
            logger.warning("Search failed: %s", exc)
            self.last_error = str(exc)
            self._view = ()
            return
        self.last_error = None
        self._view = tuple(node for node in self._baseline if matches(node.package_name or ""))

    def reset(self) -> None:
        self.last_error = None
        self._view = self._baseline


class ArchiveSearch:
    """Search surface over one archive's package and class index."""

    def __init__(self, tree: ArchiveTree, mode: str = MODE_PACKAGES) -> None:
        self._views: dict[str, FilterView] = {
            MODE_PACKAGES: FilterView(tree.packages),
            MODE_CLASSES: FilterView(tree.classes),
        }
        self.mode = _check_mode(mode)

    def select_mode(self, mode: str) -> FilterView:
        """Switch to ``mode``; a switch resets the newly selected view."""
        mode = _check_mode(mode)
        view = self._views[mode]
        if mode != self.mode:
            view.reset()
            self.mode = mode
        return view

    def filter(self, query: str, is_regex: bool = False, mode: str | None = None) -> tuple[ArchiveNode, ...]:
        view = self.select_mode(self.mode if mode is None else mode)
        view.filter(query, is_regex)
        return view.view

    def reset(self, mode: str | None = None) -> tuple[ArchiveNode, ...]:
        view = self.select_mode(self.mode if mode is None else mode)
        view.reset()
        return view.view

    def view(self, mode: str | None = None) -> FilterView:
        """Return the filter view for ``mode`` (current mode by default) without switching."""
        return self._views[self.mode if mode is None else _check_mode(mode)]


def _check_mode(mode: str) -> str:
    if mode not in SEARCH_MODES:
        raise ValueError(f"unknown search mode: {mode!r} (expected one of {', '.join(SEARCH_MODES)})")
    return mode
