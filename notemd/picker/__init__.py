"""Interactive note picker: selection state, key tables, and the event loop.

``pick_note`` is the session entry point. It runs the initial search, takes
over the terminal, and always hands the terminal back, whether the loop ends
with a choice, a cancel, or an exception.
"""

from __future__ import annotations

import sys
from pathlib import Path

from ..input import read_key
from ..render import draw_frame
from ..search import ErrorReporter
from ..state import SelectionState
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .keys import KeyComboBinding, KeyComboRegistry, PickerAction, PickerKeyDispatcher
from .loop import PickerLoopCallbacks, run_picker_loop
from .selection import SearchFunction, SelectionController

__all__ = [
    "KeyComboBinding",
    "KeyComboRegistry",
    "PickerAction",
    "PickerKeyDispatcher",
    "PickerLoopCallbacks",
    "SelectionController",
    "pick_note",
    "run_picker_loop",
]


def pick_note(
    root: Path,
    extension: str = ".md",
    theme: UITheme = DEFAULT_THEME,
    *,
    on_error: ErrorReporter | None = None,
    search: SearchFunction | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> Path | None:
    """Let the user pick a note under ``root``; ``None`` means cancelled."""
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    state = SelectionState(root=root, extension=extension)
    if search is None:
        controller = SelectionController(state, on_error=on_error)
    else:
        controller = SelectionController(state, search=search, on_error=on_error)
    controller.refresh_results()

    terminal = TerminalController(stdin_fd, stdout_fd)
    callbacks = PickerLoopCallbacks(
        read_key=lambda: read_key(stdin_fd),
        draw=lambda frame: draw_frame(frame, stdout_fd),
        terminal_size=terminal.size,
    )
    with terminal.raw_mode():
        return run_picker_loop(controller, callbacks, theme)
