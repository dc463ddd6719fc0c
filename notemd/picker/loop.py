"""Main interactive event loop for the note picker.

Blocks on one key at a time, dispatches it to the active mode, and redraws.
The loop is wiring only; behavior lives in the controller and key tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..render import Frame, render_frame
from ..state import SelectionState
from ..ui_theme import DEFAULT_THEME, UITheme
from .keys import PickerAction, PickerKeyDispatcher
from .selection import SelectionController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerLoopCallbacks:
    """Injected terminal operations used by ``run_picker_loop``.

    Keeping I/O behind callbacks lets the loop run against scripted keys in
    tests without a real terminal.
    """

    read_key: Callable[[], str]
    draw: Callable[[Frame], None]
    terminal_size: Callable[[], tuple[int, int]]


def run_picker_loop(
    controller: SelectionController,
    callbacks: PickerLoopCallbacks,
    theme: UITheme = DEFAULT_THEME,
) -> Path | None:
    """Run the picker until a confirm or cancel key.

    Returns the chosen note path on confirm and ``None`` on cancel or when the
    key source reaches end of input. ``PatternError`` and terminal ``OSError``
    propagate to the caller.
    """
    state: SelectionState = controller.state
    dispatcher = PickerKeyDispatcher(controller)
    last_size: tuple[int, int] | None = None

    while True:
        size = callbacks.terminal_size()
        if state.dirty or size != last_size:
            width, height = size
            callbacks.draw(render_frame(state, width, height, theme))
            state.dirty = False
            last_size = size

        key = callbacks.read_key()
        if not key:
            logger.info("Input closed, leaving picker")
            return None

        action = dispatcher.handle_key(key)
        if action is PickerAction.CONFIRM:
            return controller.take_selection()
        if action is PickerAction.CANCEL:
            logger.debug("Picker cancelled")
            return None
