"""Name-or-content note matching.

A note qualifies when its stem matches the pattern; only notes whose stem
does not match have their content scanned. Content scanning stops at the
first matching line, so results carry existence only, never positions.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .files import ErrorReporter, iter_note_files

logger = logging.getLogger(__name__)


class PatternError(ValueError):
    """Raised when the search text is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid search pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


@dataclass(frozen=True)
class SearchResult:
    path: Path

    @property
    def label(self) -> str:
        """Display label: the file name without its extension."""
        return self.path.stem


def log_search_error(path: Path, exc: Exception) -> None:
    """Default reporter for files whose content could not be scanned."""
    logger.warning("Could not search %s: %s", path, exc)


_HEX_ESCAPE_DIGITS = {"x": 2, "u": 4, "U": 8}


def _escaped_literal(pattern: str, start: int) -> tuple[str | None, int]:
    """Decode the escape at ``start``; return the character it spells (if any) and the next index."""
    kind = pattern[start + 1 : start + 2]
    if kind == "N" and pattern.startswith("{", start + 2):
        close = pattern.find("}", start + 3)
        if close < 0:
            return None, len(pattern)
        try:
            return unicodedata.lookup(pattern[start + 3 : close]), close + 1
        except KeyError:
            return None, close + 1
    digits = _HEX_ESCAPE_DIGITS.get(kind)
    if digits is not None:
        end = start + 2 + digits
        try:
            return chr(int(pattern[start + 2 : end], 16)), end
        except ValueError:
            return None, start + 2
    return None, start + 2


def pattern_has_uppercase(pattern: str) -> bool:
    """Return whether ``pattern`` contains an uppercase literal character.

    Class escapes like ``\\W`` or ``\\S`` and group names do not count.
    Escapes spelling out a character (``\\N{...}``, ``\\xHH``, ``\\uHHHH``,
    ``\\UHHHHHHHH``) count when that character is uppercase.
    """
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            literal, i = _escaped_literal(pattern, i)
            if literal is not None and literal.isupper():
                return True
            continue
        if pattern.startswith("(?P<", i) or pattern.startswith("(?P=", i):
            close = pattern.find(">", i) if pattern[i + 3] == "<" else pattern.find(")", i)
            i = n if close < 0 else close + 1
            continue
        if ch.isupper():
            return True
        i += 1
    return False


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` with smart case sensitivity.

    Case-insensitive unless the pattern holds an uppercase literal; patterns
    with no letters at all are case-insensitive. Raises ``PatternError``.
    """
    flags = 0 if pattern_has_uppercase(pattern) else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def stem_matches(path: Path, regex: re.Pattern[str]) -> bool:
    """Return whether the stem of ``path`` matches.

    Stems that are not valid text (undecodable filename bytes) never match
    here, so the caller falls through to the content scan.
    """
    stem = path.stem
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return regex.search(stem) is not None


def content_matches(path: Path, regex: re.Pattern[str]) -> bool:
    """Return whether any line of ``path`` matches, stopping at the first hit.

    Raises ``OSError`` when the file cannot be read.
    """
    with path.open("r", encoding="utf-8", errors="replace", newline="") as handle:
        for line in handle:
            if regex.search(line.rstrip("\r\n")) is not None:
                return True
    return False


def match_files(
    paths: Iterable[Path],
    regex: re.Pattern[str],
    *,
    on_error: ErrorReporter | None = None,
) -> list[SearchResult]:
    """Filter ``paths`` down to the ones whose stem or content matches."""
    report = on_error if on_error is not None else log_search_error
    results: list[SearchResult] = []
    for path in paths:
        if stem_matches(path, regex):
            results.append(SearchResult(path))
            continue
        try:
            matched = content_matches(path, regex)
        except OSError as exc:
            report(path, exc)
            continue
        if matched:
            results.append(SearchResult(path))
    return results


def search_notes(
    root: Path,
    pattern: str,
    *,
    on_error: ErrorReporter | None = None,
) -> list[SearchResult]:
    """Return the notes under ``root`` matching ``pattern`` by stem or content.

    The pattern is compiled before the tree is walked, so an invalid pattern
    raises ``PatternError`` without touching any file. ``on_error`` receives
    both skipped directory entries and files that could not be scanned.
    """
    regex = compile_pattern(pattern)
    results = match_files(iter_note_files(root, on_error=on_error), regex, on_error=on_error)
    logger.debug("Search %r under %s: %d results", pattern, root, len(results))
    return results
