"""Display-width aware text shaping for the picker frame.

Measures, clips and pads plain text in terminal cells so borders stay aligned
when notes have wide (East Asian) or combining characters in their names.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and control characters consume no columns, East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_text(text: str, max_cols: int) -> str:
    """Trim plain ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def fit_text(text: str, width: int) -> str:
    """Clip plain ``text`` to ``width`` columns and pad it with spaces."""
    clipped = clip_text(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def escape_control_chars(text: str) -> str:
    """Replace C0, DEL and C1 control characters with visible ``\\xNN`` escapes.

    Newlines and tabs are escaped too, so the result always fits one row.
    """
    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
        else:
            out.append(ch)
    return "".join(out)
