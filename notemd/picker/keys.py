"""Per-mode key dispatch tables for the note picker.

Each :class:`InputMode` owns a :class:`KeyComboRegistry`. Keys a registry does
not bind fall back to the mode's default handler, so every key has a defined
effect in every mode (often a no-op).
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from ..state import InputMode
from .selection import SelectionController


class PickerAction(enum.Enum):
    CONTINUE = "continue"
    CONFIRM = "confirm"
    CANCEL = "cancel"


KeyHandler = Callable[[], PickerAction]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyComboRegistry:
    """Small key-dispatch table with a fallback for unbound keys."""

    def __init__(self, fallback: Callable[[str], PickerAction]) -> None:
        self._fallback = fallback
        self._handlers: dict[str, KeyHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> PickerAction:
        """Invoke the handler bound to ``key`` or the fallback."""
        handler = self._handlers.get(key)
        if handler is None:
            return self._fallback(key)
        return handler()


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def _run(action: Callable[[], None]) -> KeyHandler:
    def handler() -> PickerAction:
        action()
        return PickerAction.CONTINUE

    return handler


def _returns(action: PickerAction) -> KeyHandler:
    return lambda: action


def build_input_registry(controller: SelectionController) -> KeyComboRegistry:
    def fallback(key: str) -> PickerAction:
        if _is_text_key(key):
            controller.append_text(key)
        return PickerAction.CONTINUE

    return KeyComboRegistry(fallback).register_bindings(
        KeyComboBinding(("BACKSPACE",), _run(controller.delete_last_char)),
        KeyComboBinding(("ESC",), _run(controller.enter_select_mode)),
        KeyComboBinding(("ENTER",), _returns(PickerAction.CONFIRM)),
        KeyComboBinding(("CTRL_C",), _returns(PickerAction.CANCEL)),
    )


def build_select_registry(controller: SelectionController) -> KeyComboRegistry:
    return KeyComboRegistry(lambda _key: PickerAction.CONTINUE).register_bindings(
        KeyComboBinding(("q", "ESC", "CTRL_C"), _returns(PickerAction.CANCEL)),
        KeyComboBinding(("i",), _run(controller.enter_input_mode)),
        KeyComboBinding(("j", "DOWN"), _run(controller.select_next)),
        KeyComboBinding(("k", "UP"), _run(controller.select_previous)),
        KeyComboBinding(("ENTER",), _returns(PickerAction.CONFIRM)),
    )


class PickerKeyDispatcher:
    """Route key tokens to the registry of the currently active mode."""

    def __init__(self, controller: SelectionController) -> None:
        self.controller = controller
        self._registries: dict[InputMode, KeyComboRegistry] = {
            InputMode.INPUT: build_input_registry(controller),
            InputMode.SELECT: build_select_registry(controller),
        }

    def handle_key(self, key: str) -> PickerAction:
        return self._registries[self.controller.state.mode].dispatch(key)
