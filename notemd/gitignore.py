"""Hide notes that git ignores.

The notes directory is often a git checkout, so ignored scratch files and
build output should not show up in the picker. git itself is the source of
truth: one ``ls-files`` call lists every ignored path, and the answer is
cached per notes root for a short while.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MATCHER_CACHE_SIZE = 16
MATCHER_TTL_SECONDS = 2.0

_IGNORED_LISTING_ARGS = ("ls-files", "-z", "--others", "-i", "--exclude-standard", "--directory")


def _contains(root: Path, path: Path) -> bool:
    return path == root or root in path.parents


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Ignored paths below one notes root, resolved to absolute form."""

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` or a directory between it and ``root`` is ignored.

        The root itself never counts, even when git ignores it.
        """
        resolved = path.resolve()
        if not _contains(self.root, resolved):
            return False
        if resolved in self.ignored_files:
            return True
        for candidate in (resolved, *resolved.parents):
            if candidate == self.root:
                break
            if candidate in self.ignored_dirs:
                return True
        return False


def _git_stdout(repo: Path, *args: str) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", "-C", str(repo), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git %s failed in %s: %s", args[0], repo, exc)
        return None
    return proc.stdout


def _load_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Build a matcher for ``root``, or ``None`` when git cannot answer.

    That covers a missing git binary and a root outside any work tree.
    """
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level = _git_stdout(root, "rev-parse", "--show-toplevel")
    if not top_level or not top_level.strip():
        return None
    repo_root = Path(top_level.decode("utf-8", errors="surrogateescape").strip()).resolve()
    if not _contains(repo_root, root):
        return None

    listing = _git_stdout(repo_root, *_IGNORED_LISTING_ARGS)
    if listing is None:
        return None

    files: set[Path] = set()
    dirs: set[Path] = set()
    for entry in filter(None, listing.split(b"\x00")):
        name = entry.decode("utf-8", errors="surrogateescape")
        marked_dir = name.endswith("/")
        name = name.rstrip("/")
        if not name:
            continue
        target = (repo_root / name).resolve()
        # The walk root is listed even when git ignores it or a parent.
        if target == root or not _contains(root, target):
            continue
        (dirs if marked_dir or target.is_dir() else files).add(target)

    logger.debug("%s: git ignores %d notes and %d directories", root, len(files), len(dirs))
    return GitIgnoreMatcher(root=root, ignored_files=frozenset(files), ignored_dirs=frozenset(dirs))


@dataclass(frozen=True)
class _CachedMatcher:
    matcher: GitIgnoreMatcher | None
    root_mtime_ns: int | None
    loaded_at: float

    def is_fresh(self, root_mtime_ns: int | None, now: float) -> bool:
        return self.root_mtime_ns == root_mtime_ns and now - self.loaded_at <= MATCHER_TTL_SECONDS


_MATCHER_CACHE: OrderedDict[Path, _CachedMatcher] = OrderedDict()


def clear_gitignore_cache() -> None:
    _MATCHER_CACHE.clear()


def get_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Return the matcher for ``root``, reloading it once it goes stale.

    An entry is stale after ``MATCHER_TTL_SECONDS`` or as soon as the root
    directory's mtime moves.
    """
    root = root.resolve()
    try:
        mtime_ns: int | None = root.stat().st_mtime_ns
    except OSError:
        mtime_ns = None
    now = time.monotonic()

    cached = _MATCHER_CACHE.get(root)
    if cached is not None and cached.is_fresh(mtime_ns, now):
        _MATCHER_CACHE.move_to_end(root)
        return cached.matcher

    matcher = _load_matcher(root)
    _MATCHER_CACHE[root] = _CachedMatcher(matcher, mtime_ns, now)
    _MATCHER_CACHE.move_to_end(root)
    while len(_MATCHER_CACHE) > MATCHER_CACHE_SIZE:
        _MATCHER_CACHE.popitem(last=False)
    return matcher
