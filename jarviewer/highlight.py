"""Terminal rendering of archive entry text.

Highlights entry text with Pygments using a lexer picked from the entry
name, and neutralizes terminal control bytes first.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Return ``style`` if Pygments knows it, otherwise the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def lexer_for_entry(file_path: str, text: str):
    """Pick a lexer from the entry's file name, falling back to plain text."""
    name = file_path.rsplit("/", 1)[-1]
    try:
        return get_lexer_for_filename(name, text)
    except ClassNotFound:
        return TextLexer()


def render_entry_text(text: str, file_path: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return printable text for one entry, ANSI-highlighted unless ``no_color``."""
    clean = sanitize_terminal_text(text)
    if no_color:
        return clean
    formatter = _formatter_for_style(normalize_style(style))
    return highlight(clean, lexer_for_entry(file_path, clean), formatter)
