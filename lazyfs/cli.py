"""Command-line front door for lazyfs.

Exposes the filesystem layer for inspection: list a directory the way the
cache sees it, print a file through ``read_file``, or show a file's
modification key.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .entry import EntryKind
from .highlight import DEFAULT_STYLE, render_for_terminal
from .real_fs import RealFileSystem, real_fs

logger = logging.getLogger(__name__)


def format_listing(fs: RealFileSystem, directory: str) -> str:
    """Render entries of ``directory`` with directories first, suffixed ``/``.

    Entries that cannot be stat'ed are suffixed ``?``.

    Raises ``SystemExit`` when the directory cannot be listed.
    """
    entries, error = fs.read_directory(directory)
    if error is not None:
        raise SystemExit(f"error: {error}")

    rows: list[tuple[bool, str]] = []
    for name, entry in entries.items():
        kind, kind_error = entry.kind()
        if kind_error is not None:
            logger.debug("Could not stat %s: %s", entry.path, kind_error)
            rows.append((False, f"{name}?"))
            continue
        rows.append((kind is EntryKind.DIR, f"{name}/" if kind is EntryKind.DIR else name))
    rows.sort(key=lambda item: (not item[0], item[1].lower()))
    return "".join(f"{label}\n" for _is_dir, label in rows)


def _run_ls(fs: RealFileSystem, args: argparse.Namespace) -> None:
    directory = args.path if args.path is not None else fs.cwd()
    sys.stdout.write(format_listing(fs, directory))


def _run_cat(fs: RealFileSystem, args: argparse.Namespace) -> None:
    content, error = fs.read_file(args.path)
    if error is not None:
        raise SystemExit(f"error: {error}")
    color = not args.no_color and sys.stdout.isatty()
    sys.stdout.write(render_for_terminal(content, Path(args.path), args.style, color))


def _run_modkey(fs: RealFileSystem, args: argparse.Namespace) -> None:
    key, error = fs.mod_key(args.path)
    if key is None:
        raise SystemExit(f"error: {error}")
    sys.stdout.write(
        f"inode={key.inode} size={key.size} mtime_ns={key.mtime_ns} "
        f"mode={key.mode:#o} uid={key.uid}\n"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfs",
        description="Inspect directories and files through the caching filesystem layer.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log cache and probe activity to stderr.")
    commands = parser.add_subparsers(dest="command", required=True)

    ls_parser = commands.add_parser("ls", help="List a directory, directories first.")
    ls_parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to the resolved cwd.")
    ls_parser.set_defaults(handler=_run_ls)

    cat_parser = commands.add_parser("cat", help="Print a file's content.")
    cat_parser.add_argument("path", help="File to print.")
    cat_parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name.")
    cat_parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    cat_parser.set_defaults(handler=_run_cat)

    modkey_parser = commands.add_parser("modkey", help="Print a file's modification key.")
    modkey_parser.add_argument("path", help="File to fingerprint.")
    modkey_parser.set_defaults(handler=_run_modkey)
    return parser


def main(fs: RealFileSystem | None = None) -> None:
    """Parse CLI arguments and run one inspection command.

    ``fs`` is primarily for tests; when omitted a filesystem is built from
    the persisted config.
    """
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if fs is None:
        fs = real_fs()
    args.handler(fs, args)


if __name__ == "__main__":
    main()
