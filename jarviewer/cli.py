"""Command-line front door for jarviewer.

Parses CLI options, loads the archive tree, and dispatches one command:
listing a level, printing the whole tree, searching packages/classes, or
showing an entry's text.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .archive import ArchiveReadError, ZipArchiveSource
from .archive.types import MODE_CLASSES, MODE_PACKAGES
from .config import load_class_extensions, load_search_mode, load_style, save_search_mode
from .highlight import render_entry_text
from .listing import ArchiveBrowser, DisplayRecord
from .logs import configure_logging


def format_record(record: DisplayRecord, depth: int = 0) -> str:
    """Render one display record as an indented text row."""
    label = record.label + "/" if record.expandable else record.label
    suffix = "  [class]" if record.is_class_entry else ""
    return f"{'  ' * depth}{label}{suffix}"


def _lookup_ref(browser: ArchiveBrowser, path: str | None) -> str | None:
    """Map a user-typed path to a node path (``/`` means the archive root)."""
    if path is None:
        return None
    if path in ("", "/", browser.display_name):
        return browser.tree.root_path
    if browser.tree.get(path) is not None:
        return path
    as_dir = path.rstrip("/") + "/"
    if browser.tree.get(as_dir) is not None:
        return as_dir
    raise SystemExit(f"No entry named {path!r} in {browser.display_name}")


def render_listing(browser: ArchiveBrowser, path: str | None) -> str:
    ref = _lookup_ref(browser, path)
    records = browser.list_children(ref)
    return "".join(format_record(record) + "\n" for record in records)


def render_tree(browser: ArchiveBrowser) -> str:
    """Render every attached node depth-first in builder order."""
    out: list[str] = []
    for node, depth in browser.tree.walk():
        out.append(format_record(browser.record_for(node), depth) + "\n")
    return "".join(out)


def render_search(browser: ArchiveBrowser, query: str, is_regex: bool, mode: str) -> str:
    browser.search.filter(query, is_regex, mode)
    view = browser.search.view(mode)
    if view.last_error is not None:
        sys.stderr.write(f"{view.last_error}\n")
    return "".join(record.label + "\n" for record in browser.search_records(mode))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse the contents of jar/zip archives and search their packages and classes."
    )
    parser.add_argument("archive", help="Path to a jar, war, or zip archive.")
    parser.add_argument("--style", default=None, help="Pygments style name for `show` output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    commands = parser.add_subparsers(dest="command", required=True)

    ls_parser = commands.add_parser("ls", help="List one level of the archive tree.")
    ls_parser.add_argument("path", nargs="?", default=None, help="Directory inside the archive; `/` for the root.")

    commands.add_parser("tree", help="Print the whole archive tree.")

    search_parser = commands.add_parser("search", help="Filter packages or classes by name.")
    search_parser.add_argument("query", help="Substring (or regular expression with --regex).")
    search_parser.add_argument("--regex", action="store_true", help="Treat QUERY as a regular expression.")
    mode_group = search_parser.add_mutually_exclusive_group()
    mode_group.add_argument("--packages", dest="mode", action="store_const", const=MODE_PACKAGES)
    mode_group.add_argument("--classes", dest="mode", action="store_const", const=MODE_CLASSES)

    show_parser = commands.add_parser("show", help="Print the text of one archive entry.")
    show_parser.add_argument("path", help="File path inside the archive.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, load the archive, and run the chosen command."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    archive_path = Path(args.archive)
    if not archive_path.is_file():
        raise SystemExit(f"Archive not found: {archive_path}")

    browser = ArchiveBrowser(
        ZipArchiveSource(archive_path),
        class_extensions=load_class_extensions(),
        search_mode=load_search_mode(),
    )
    try:
        browser.load()
    except ArchiveReadError as exc:
        raise SystemExit(str(exc)) from exc

    if args.command == "ls":
        sys.stdout.write(render_listing(browser, args.path))
    elif args.command == "tree":
        sys.stdout.write(render_tree(browser))
    elif args.command == "search":
        mode = args.mode or browser.search.mode
        if args.mode is not None:
            save_search_mode(args.mode)
        sys.stdout.write(render_search(browser, args.query, args.regex, mode))
    elif args.command == "show":
        try:
            opened = browser.open_file(args.path)
        except ArchiveReadError as exc:
            raise SystemExit(str(exc)) from exc
        style = args.style or load_style()
        rendered = render_entry_text(opened.text, opened.file_path, style=style, no_color=args.no_color)
        sys.stdout.write(rendered if rendered.endswith("\n") else rendered + "\n")


if __name__ == "__main__":
    main()
