"""Note file enumeration for the picker.

Walks the notes directory, skipping hidden and gitignored entries, and yields
regular files in a stable case-insensitive order.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from ..gitignore import get_gitignore_matcher

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[Path, Exception], None]


def log_entry_error(path: Path, exc: Exception) -> None:
    """Default reporter for entries the enumerator has to skip."""
    logger.warning("Skipping %s: %s", path, exc)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def iter_note_files(root: Path, *, on_error: ErrorReporter | None = None) -> Iterator[Path]:
    """Yield every visible regular file below ``root``.

    Hidden names and paths git reports as ignored are skipped. Symlinked
    directories are neither yielded nor descended into. Entries that cannot
    be read are handed to ``on_error`` and skipped; the walk itself carries on.
    Each call walks the tree from scratch.
    """
    report = on_error if on_error is not None else log_entry_error
    root = Path(root)
    ignore_matcher = get_gitignore_matcher(root)

    def walk_error(exc: OSError) -> None:
        report(Path(exc.filename) if exc.filename else root, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=walk_error):
        base = Path(dirpath)
        dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
        filenames = [name for name in filenames if not _is_hidden(name)]
        if ignore_matcher is not None:
            dirnames[:] = [name for name in dirnames if not ignore_matcher.is_ignored(base / name)]
            filenames = [name for name in filenames if not ignore_matcher.is_ignored(base / name)]
        dirnames.sort(key=str.lower)
        filenames.sort(key=str.lower)
        for filename in filenames:
            path = base / filename
            try:
                # stat() follows symlinks, so a broken link raises here.
                path.stat()
            except OSError as exc:
                report(path, exc)
                continue
            if path.is_file():
                yield path
