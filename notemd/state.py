from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from .search import SearchResult


class InputMode(enum.Enum):
    INPUT = "input"
    SELECT = "select"


@dataclass
class SelectionState:
    root: Path
    extension: str = ".md"
    search_text: str = ""
    results: list[SearchResult] = field(default_factory=list)
    mode: InputMode = InputMode.INPUT
    cursor: int | None = None
    dirty: bool = True

    @property
    def selected_result(self) -> SearchResult | None:
        if self.cursor is None or not (0 <= self.cursor < len(self.results)):
            return None
        return self.results[self.cursor]
