"""Persistent JSON config helpers.

Stores class-file extensions, the highlight style, and the last search mode.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .archive.types import DEFAULT_CLASS_EXTENSIONS, MODE_PACKAGES, SEARCH_MODES
from .highlight import DEFAULT_STYLE

APP_NAME = "jarviewer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks browsing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_class_extensions() -> tuple[str, ...]:
    """Return configured compiled-unit extensions.

    Only a non-empty list of non-blank strings is accepted.
    """
    value = load_config().get("class_extensions")
    if not isinstance(value, list):
        return DEFAULT_CLASS_EXTENSIONS
    extensions = tuple(item.strip() for item in value if isinstance(item, str) and item.strip())
    return extensions or DEFAULT_CLASS_EXTENSIONS


def load_style() -> str:
    """Load persisted Pygments style name, defaulting when unset/invalid."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def save_style(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


def load_search_mode() -> str:
    value = load_config().get("search_mode")
    return value if value in SEARCH_MODES else MODE_PACKAGES


def save_search_mode(mode: str) -> None:
    """Persist the last used search mode; unknown modes are ignored."""
    if mode not in SEARCH_MODES:
        return
    config = load_config()
    config["search_mode"] = mode
    save_config(config)
