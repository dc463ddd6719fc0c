"""Search package exports.

Combines note enumeration and name-or-content matching in one import surface.
"""

from __future__ import annotations

from .files import ErrorReporter, iter_note_files, log_entry_error
from .matching import (
    PatternError,
    SearchResult,
    compile_pattern,
    content_matches,
    log_search_error,
    match_files,
    pattern_has_uppercase,
    search_notes,
    stem_matches,
)

__all__ = [
    "ErrorReporter",
    "PatternError",
    "SearchResult",
    "compile_pattern",
    "content_matches",
    "iter_note_files",
    "log_entry_error",
    "log_search_error",
    "match_files",
    "pattern_has_uppercase",
    "search_notes",
    "stem_matches",
]
