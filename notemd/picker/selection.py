"""Selection state mutations for the note picker.

Every change to :class:`SelectionState` goes through ``SelectionController``
so the cursor invariants hold after each handled key: the cursor is either
``None`` or a valid index, and an empty result list never keeps a cursor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..search import ErrorReporter, SearchResult, search_notes
from ..state import InputMode, SelectionState

logger = logging.getLogger(__name__)

SearchFunction = Callable[..., list[SearchResult]]


class SelectionController:
    """Owns search-text editing, result refreshes, and cursor navigation."""

    def __init__(
        self,
        state: SelectionState,
        search: SearchFunction = search_notes,
        on_error: ErrorReporter | None = None,
    ) -> None:
        self.state = state
        self._search = search
        self._on_error = on_error

    def refresh_results(self) -> None:
        """Re-run the search for the current text and drop the cursor.

        ``PatternError`` from the search propagates unchanged.
        """
        self.state.results = self._search(self.state.root, self.state.search_text, on_error=self._on_error)
        self.state.cursor = None
        self.state.dirty = True

    def append_text(self, text: str) -> None:
        self.state.search_text += text
        self.refresh_results()

    def delete_last_char(self) -> None:
        if not self.state.search_text:
            return
        self.state.search_text = self.state.search_text[:-1]
        self.refresh_results()

    def enter_select_mode(self) -> None:
        """Switch to select mode, highlighting the first result when none is."""
        self.state.mode = InputMode.SELECT
        if self.state.cursor is None and self.state.results:
            self.state.cursor = 0
        self.state.dirty = True

    def enter_input_mode(self) -> None:
        """Switch to input mode and clear the cursor; results stay as they are."""
        self.state.mode = InputMode.INPUT
        self.state.cursor = None
        self.state.dirty = True

    def select_next(self) -> None:
        if not self.state.results:
            return
        cursor = self.state.cursor
        if cursor is None or cursor >= len(self.state.results) - 1:
            self.state.cursor = 0
        else:
            self.state.cursor = cursor + 1
        self.state.dirty = True

    def select_previous(self) -> None:
        if not self.state.results:
            return
        cursor = self.state.cursor
        if cursor is None:
            self.state.cursor = 0
        elif cursor == 0:
            self.state.cursor = len(self.state.results) - 1
        else:
            self.state.cursor = cursor - 1
        self.state.dirty = True

    def new_note_path(self) -> Path:
        """Return the path a note named after the typed text would have."""
        return self.state.root / f"{self.state.search_text}{self.state.extension}"

    def take_selection(self) -> Path:
        """Resolve a confirm into the path to open.

        With a highlighted result in select mode, that result is removed from
        the list and its path returned. Otherwise the typed text names a new
        (or existing) note under the root directory.
        """
        state = self.state
        if state.mode is InputMode.SELECT and state.selected_result is not None:
            result = state.results.pop(state.cursor)
            if not state.results:
                state.cursor = None
            else:
                state.cursor = min(state.cursor, len(state.results) - 1)
            state.dirty = True
            logger.debug("Selected existing note %s", result.path)
            return result.path
        path = self.new_note_path()
        logger.debug("Selected note by name %s", path)
        return path
