"""Git helpers for the notes repository.

Clone, pull/push synchronization, and committing a single edited note.
Change detection compares content fingerprints taken before and after
editing, so it works whether or not the notes directory is under git.
"""

from __future__ import annotations

import hashlib
import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Raised when a git command cannot be run or exits with failure."""


def _git_executable() -> str:
    git = shutil.which("git")
    if git is None:
        raise RepositoryError("git is not installed.")
    return git


def _run_git(
    args: list[str],
    directory: Path | None = None,
    *,
    capture: bool = False,
) -> subprocess.CompletedProcess[str]:
    cmd = [_git_executable()]
    if directory is not None:
        cmd.extend(["-C", str(directory)])
    cmd.extend(args)
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise RepositoryError(f"failed to run git: {exc}") from exc
    if proc.returncode != 0:
        detail = (proc.stderr or "").strip() if capture else ""
        message = f"git {args[0]} failed with exit code {proc.returncode}"
        raise RepositoryError(f"{message}: {detail}" if detail else message)
    return proc


def clone_repository(notes_directory: Path, remote: str) -> None:
    """Clone ``remote`` into ``notes_directory``."""
    logger.info("Cloning from '%s' to notes directory %s", remote, notes_directory)
    _run_git(["clone", remote, str(notes_directory)])


def sync_repository(notes_directory: Path) -> None:
    """Pull with rebase, then push, in ``notes_directory``."""
    logger.info("Synchronizing notes repository %s", notes_directory)
    _run_git(["pull", "--rebase"], notes_directory)
    _run_git(["push"], notes_directory)


def is_work_tree(directory: Path) -> bool:
    """Return whether ``directory`` lies inside a git work tree."""
    if shutil.which("git") is None:
        return False
    try:
        proc = _run_git(["rev-parse", "--is-inside-work-tree"], directory, capture=True)
    except RepositoryError:
        return False
    return proc.stdout.strip() == "true"


def commit_note(notes_directory: Path, note: Path, message: str | None = None) -> None:
    """Stage ``note`` and commit it alone with ``message``."""
    try:
        relative = note.resolve().relative_to(notes_directory.resolve())
    except ValueError as exc:
        raise RepositoryError(f"{note} is outside the notes directory {notes_directory}") from exc
    commit_message = message if message is not None else f"Update {relative.as_posix()}"
    logger.info("Committing %s", relative)
    _run_git(["add", "--", str(relative)], notes_directory, capture=True)
    _run_git(
        ["commit", "-m", commit_message, "--", str(relative)],
        notes_directory,
        capture=True,
    )


def note_fingerprint(path: Path) -> str | None:
    """Return a content digest of ``path``, or ``None`` when it does not exist."""
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    return hashlib.sha256(data).hexdigest()


def note_changed(path: Path, before: str | None) -> bool:
    """Return whether ``path`` differs from the fingerprint taken ``before``."""
    return note_fingerprint(path) != before
