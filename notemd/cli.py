"""Command-line front door for notemd.

Parses CLI options, prepares the notes directory and logging, then either
runs a repository subcommand or the interactive picker followed by the editor.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .editor import launch_editor
from .logging_config import configure_logging
from .picker import pick_note
from .repository import (
    RepositoryError,
    clone_repository,
    commit_note,
    is_work_tree,
    note_changed,
    note_fingerprint,
    sync_repository,
)
from .search import PatternError
from .ui_theme import PLAIN_THEME, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _is_within(path: Path, directory: Path) -> bool:
    resolved = directory.resolve()
    target = path.resolve()
    return target == resolved or resolved in target.parents


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notemd",
        description="Pick a note by name or content and open it in your editor.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Use verbose logging.")
    parser.add_argument(
        "--note-directory",
        metavar="DIR",
        default=None,
        help="Directory to read and write notes (default: ~/.notes).",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Extension for newly named notes (default: .md).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the picker.")
    subcommands = parser.add_subparsers(dest="command")
    clone = subcommands.add_parser("clone", help="Clone a remote repository to the notes directory.")
    clone.add_argument("remote", help="Remote repository url to clone.")
    subcommands.add_parser("sync", help="Synchronize (pull/push) the notes repository.")
    return parser


def edit_note(notes_directory: Path, note: Path) -> None:
    """Open ``note`` in the editor and commit it when it changed under git.

    Notes outside ``notes_directory`` (typed names like ``../x``) are edited
    but never committed.
    """
    before = note_fingerprint(note)
    error = launch_editor(note)
    if error is not None:
        raise SystemExit(error)
    if not note_changed(note, before):
        logger.info("No changes to %s", note)
        return
    if not _is_within(note, notes_directory):
        logger.warning("Not committing %s: outside the notes directory %s", note, notes_directory)
        return
    if is_work_tree(notes_directory):
        commit_note(notes_directory, note)


def run_picker(args: argparse.Namespace, notes_directory: Path) -> None:
    extension = config.load_note_extension() if args.extension is None else config.normalize_extension(args.extension)
    theme = PLAIN_THEME if args.no_color else resolve_theme(args.theme or config.load_theme_name())
    try:
        note = pick_note(notes_directory, extension, theme)
    except PatternError as exc:
        raise SystemExit(str(exc)) from exc
    if note is None:
        return
    edit_note(notes_directory, note)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the picker or a subcommand."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.note_directory is not None:
        notes_directory = Path(args.note_directory).expanduser()
    else:
        notes_directory = config.load_note_directory()
    notes_directory = notes_directory.resolve()

    configure_logging(args.verbose)
    logger.debug("Using notes directory %s", notes_directory)

    try:
        if args.command == "clone":
            clone_repository(notes_directory, args.remote)
            if args.note_directory is not None:
                config.save_note_directory(notes_directory)
                logger.info("Saved %s as the default notes directory", notes_directory)
            return
        notes_directory.mkdir(parents=True, exist_ok=True)
        if args.command == "sync":
            sync_repository(notes_directory)
            return
        if not _is_interactive():
            raise SystemExit("notemd needs an interactive terminal.")
        run_picker(args, notes_directory)
    except RepositoryError as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
