"""Rendering for the note picker.

``render_frame`` is a pure projection of :class:`SelectionState` onto a grid
of styled rows; ``draw_frame`` writes such a frame to the terminal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .ansi import display_width, escape_control_chars, fit_text
from .state import InputMode, SelectionState
from .ui_theme import DEFAULT_THEME, UITheme

APP_TITLE = "NoteMD"
SEARCH_TITLE = "Search"
RESULTS_TITLE = "Notes"
PROMPT = "> "
HIGHLIGHT_SYMBOL = ">> "
SEARCH_BOX_HEIGHT = 3
MIN_WIDTH = 12
MIN_HEIGHT = 9


@dataclass(frozen=True)
class Frame:
    """Fully composed screen rows plus the text cursor position.

    ``cursor`` is a zero-based ``(column, row)`` pair, or ``None`` when no
    text cursor should be shown.
    """

    lines: list[str]
    cursor: tuple[int, int] | None = None


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _top_border(width: int, title: str, style: str, theme: UITheme, *, centered: bool = False) -> str:
    inner = width - 2
    title = fit_text(title, inner).rstrip() if title else ""
    title_width = display_width(title)
    if centered:
        left = (inner - title_width) // 2
    else:
        left = 0
    right = inner - title_width - left
    return (
        _styled("┌" + "─" * left, style, theme)
        + _styled(title, theme.title, theme)
        + _styled("─" * right + "┐", style, theme)
    )


def _bottom_border(width: int, style: str, theme: UITheme) -> str:
    return _styled("└" + "─" * (width - 2) + "┘", style, theme)


def _boxed_row(content: str, style: str, theme: UITheme) -> str:
    side = _styled("│", style, theme)
    return f"{side}{content}{side}"


def results_list_rows(height: int) -> int:
    """Return how many result rows fit in a terminal ``height`` rows tall."""
    # outer border (2) + margin (2) + search box (3) + results border (2)
    return max(0, height - 4 - SEARCH_BOX_HEIGHT - 2)


def results_scroll_offset(cursor: int | None, visible_rows: int) -> int:
    """Return the first visible result index keeping ``cursor`` on screen."""
    if cursor is None or visible_rows <= 0 or cursor < visible_rows:
        return 0
    return cursor - visible_rows + 1


def _result_rows(state: SelectionState, width: int, rows: int, theme: UITheme) -> list[str]:
    out: list[str] = []
    if not state.results:
        if state.search_text and rows > 0:
            hint = f"no matches, Enter opens {state.search_text}{state.extension}"
            out.append(_styled(fit_text(hint, width), theme.empty_hint, theme))
        return out + [" " * width] * (rows - len(out))

    offset = results_scroll_offset(state.cursor, rows)
    symbol_pad = " " * len(HIGHLIGHT_SYMBOL) if state.cursor is not None else ""
    for idx in range(offset, min(len(state.results), offset + rows)):
        label = escape_control_chars(state.results[idx].label)
        if idx == state.cursor:
            out.append(_styled(fit_text(HIGHLIGHT_SYMBOL + label, width), theme.result_selected, theme))
        else:
            out.append(_styled(fit_text(symbol_pad + label, width), theme.result, theme))
    return out + [" " * width] * (rows - len(out))


def render_frame(
    state: SelectionState,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> Frame:
    """Project ``state`` onto a ``width`` x ``height`` frame without side effects.

    Layout: an outer panel titled ``NoteMD``, inside it (one cell margin) a
    three-row search box and below it the scrolling list of result stems.
    The text cursor sits after the typed text in input mode only.
    """
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        message = fit_text("Terminal too small", max(0, width))
        return Frame(lines=[message] + [" " * max(0, width)] * (max(1, height) - 1))

    outer_inner = width - 2
    content_width = outer_inner - 2
    box_inner = content_width - 2
    input_active = state.mode is InputMode.INPUT
    search_style = theme.border_active if input_active else theme.border
    list_rows = results_list_rows(height)

    body: list[str] = []
    body.append(_top_border(content_width, SEARCH_TITLE, search_style, theme))
    prompt = fit_text(PROMPT + state.search_text, box_inner)
    body.append(_boxed_row(_styled(prompt, theme.prompt, theme), search_style, theme))
    body.append(_bottom_border(content_width, search_style, theme))
    body.append(_top_border(content_width, RESULTS_TITLE, theme.border, theme))
    for row in _result_rows(state, box_inner, list_rows, theme):
        body.append(_boxed_row(row, theme.border, theme))
    body.append(_bottom_border(content_width, theme.border, theme))

    blank_inner = " " * outer_inner
    lines = [_top_border(width, APP_TITLE, theme.border, theme, centered=True)]
    lines.append(_boxed_row(blank_inner, theme.border, theme))
    for row in body:
        lines.append(_boxed_row(f" {row} ", theme.border, theme))
    lines.append(_boxed_row(blank_inner, theme.border, theme))
    lines.append(_bottom_border(width, theme.border, theme))

    cursor = None
    if input_active:
        # outer border + margin + search box border + prompt
        column = 2 + 1 + display_width(PROMPT) + display_width(state.search_text)
        cursor = (min(column, width - 4), 3)
    return Frame(lines=lines, cursor=cursor)


def draw_frame(frame: Frame, stdout_fd: int) -> None:
    """Write ``frame`` to ``stdout_fd`` and place (or hide) the text cursor."""
    out: list[str] = ["\033[H\033[J"]
    out.append("\r\n".join(frame.lines))
    if frame.cursor is None:
        out.append("\033[?25l")
    else:
        column, row = frame.cursor
        out.append(f"\033[{row + 1};{column + 1}H\033[?25h")
    os.write(stdout_fd, "".join(out).encode("utf-8", errors="replace"))
