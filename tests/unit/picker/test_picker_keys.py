"""Tests for the per-mode key tables and the picker event loop."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from notemd.picker import (
    KeyComboBinding,
    KeyComboRegistry,
    PickerAction,
    PickerKeyDispatcher,
    PickerLoopCallbacks,
    SelectionController,
    pick_note,
    run_picker_loop,
)
from notemd.render import Frame
from notemd.search import PatternError, SearchResult
from notemd.state import InputMode, SelectionState
from notemd.terminal import LEAVE_TUI_SEQUENCE

ROOT = Path("/notes")


def _static_search(names: list[str]):
    def search(root: Path, pattern: str, *, on_error=None) -> list[SearchResult]:
        return [SearchResult(root / name) for name in names if pattern.lower() in name]

    return search


def _controller(names: list[str]) -> SelectionController:
    controller = SelectionController(SelectionState(root=ROOT), search=_static_search(names))
    controller.refresh_results()
    return controller


class KeyComboRegistryTests(unittest.TestCase):
    def test_unbound_keys_use_fallback(self) -> None:
        seen: list[str] = []

        def fallback(key: str) -> PickerAction:
            seen.append(key)
            return PickerAction.CONTINUE

        registry = KeyComboRegistry(fallback).register_binding(
            KeyComboBinding(("x", "y"), lambda: PickerAction.CANCEL)
        )

        self.assertIs(registry.dispatch("x"), PickerAction.CANCEL)
        self.assertIs(registry.dispatch("y"), PickerAction.CANCEL)
        self.assertIs(registry.dispatch("z"), PickerAction.CONTINUE)
        self.assertEqual(seen, ["z"])


class InputModeKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = _controller(["alpha.md", "beta.md"])
        self.dispatcher = PickerKeyDispatcher(self.controller)

    def test_printable_keys_are_typed_including_command_letters(self) -> None:
        for key in "qijk":
            self.assertIs(self.dispatcher.handle_key(key), PickerAction.CONTINUE)
        self.assertEqual(self.controller.state.search_text, "qijk")
        self.assertIs(self.controller.state.mode, InputMode.INPUT)

    def test_backspace_edits_text(self) -> None:
        self.dispatcher.handle_key("a")
        self.dispatcher.handle_key("BACKSPACE")
        self.assertEqual(self.controller.state.search_text, "")

    def test_escape_switches_to_select_mode(self) -> None:
        self.assertIs(self.dispatcher.handle_key("ESC"), PickerAction.CONTINUE)
        self.assertIs(self.controller.state.mode, InputMode.SELECT)
        self.assertEqual(self.controller.state.cursor, 0)

    def test_enter_confirms(self) -> None:
        self.assertIs(self.dispatcher.handle_key("ENTER"), PickerAction.CONFIRM)

    def test_navigation_and_unknown_tokens_are_noops(self) -> None:
        for key in ("UP", "DOWN", "LEFT", "TAB", "MOUSE", "UNKNOWN"):
            self.assertIs(self.dispatcher.handle_key(key), PickerAction.CONTINUE)
        self.assertEqual(self.controller.state.search_text, "")
        self.assertIsNone(self.controller.state.cursor)


class SelectModeKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = _controller(["alpha.md", "beta.md", "gamma.md"])
        self.dispatcher = PickerKeyDispatcher(self.controller)
        self.dispatcher.handle_key("ESC")

    def test_q_and_escape_cancel(self) -> None:
        self.assertIs(self.dispatcher.handle_key("q"), PickerAction.CANCEL)
        self.assertIs(self.dispatcher.handle_key("ESC"), PickerAction.CANCEL)

    def test_j_k_and_arrows_move_cursor(self) -> None:
        self.dispatcher.handle_key("j")
        self.assertEqual(self.controller.state.cursor, 1)
        self.dispatcher.handle_key("DOWN")
        self.assertEqual(self.controller.state.cursor, 2)
        self.dispatcher.handle_key("j")
        self.assertEqual(self.controller.state.cursor, 0)
        self.dispatcher.handle_key("k")
        self.assertEqual(self.controller.state.cursor, 2)
        self.dispatcher.handle_key("UP")
        self.assertEqual(self.controller.state.cursor, 1)

    def test_i_returns_to_input_mode(self) -> None:
        self.dispatcher.handle_key("i")
        self.assertIs(self.controller.state.mode, InputMode.INPUT)
        self.assertIsNone(self.controller.state.cursor)

    def test_other_characters_do_not_type(self) -> None:
        self.assertIs(self.dispatcher.handle_key("x"), PickerAction.CONTINUE)
        self.assertIs(self.dispatcher.handle_key("BACKSPACE"), PickerAction.CONTINUE)
        self.assertEqual(self.controller.state.search_text, "")
        self.assertEqual(self.controller.state.cursor, 0)

    def test_enter_confirms(self) -> None:
        self.assertIs(self.dispatcher.handle_key("ENTER"), PickerAction.CONFIRM)


class PickerLoopTests(unittest.TestCase):
    def _run(self, controller: SelectionController, keys: list[str], sizes=None):
        frames: list[Frame] = []
        key_iter = iter(keys)
        size_iter = iter(sizes) if sizes is not None else None
        callbacks = PickerLoopCallbacks(
            read_key=lambda: next(key_iter, ""),
            draw=frames.append,
            terminal_size=(lambda: next(size_iter)) if size_iter is not None else (lambda: (60, 20)),
        )
        return run_picker_loop(controller, callbacks), frames

    def test_typing_then_enter_returns_new_note_path(self) -> None:
        controller = _controller(["alpha.md"])
        chosen, frames = self._run(controller, ["t", "o", "d", "o", "ENTER"])

        self.assertEqual(chosen, ROOT / "todo.md")
        self.assertEqual(len(frames), 5)

    def test_select_and_confirm_returns_existing_note(self) -> None:
        controller = _controller(["alpha.md", "beta.md"])
        chosen, _frames = self._run(controller, ["ESC", "j", "ENTER"])

        self.assertEqual(chosen, ROOT / "beta.md")
        self.assertEqual([r.label for r in controller.state.results], ["alpha"])

    def test_cancel_returns_none(self) -> None:
        controller = _controller(["alpha.md"])
        chosen, _frames = self._run(controller, ["ESC", "q"])
        self.assertIsNone(chosen)

    def test_end_of_input_returns_none(self) -> None:
        controller = _controller(["alpha.md"])
        chosen, _frames = self._run(controller, [])
        self.assertIsNone(chosen)

    def test_noop_keys_do_not_redraw_but_resize_does(self) -> None:
        controller = _controller(["alpha.md"])
        _chosen, frames = self._run(
            controller,
            ["UP", "UP", "ESC", "q"],
            sizes=[(60, 20), (60, 20), (80, 20), (80, 20)],
        )
        # initial draw, the resize, and the mode switch
        self.assertEqual(len(frames), 3)

    def test_pattern_error_propagates_from_loop(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            controller = SelectionController(SelectionState(root=Path(tmp)))
            controller.refresh_results()
            with self.assertRaises(PatternError):
                self._run(controller, ["(", "ENTER"])


class PickNoteSessionTests(unittest.TestCase):
    def _patch_terminal(self):
        return (
            mock.patch("notemd.terminal.termios.tcgetattr", return_value=[0]),
            mock.patch("notemd.terminal.tty.setraw"),
            mock.patch("notemd.terminal.termios.tcsetattr"),
            mock.patch("notemd.terminal.os.write"),
            mock.patch("notemd.picker.draw_frame"),
        )

    def test_terminal_is_restored_when_loop_raises(self) -> None:
        getattr_p, setraw_p, setattr_p, write_p, draw_p = self._patch_terminal()
        with getattr_p, setraw_p, setattr_p as setattr_mock, write_p as write_mock, draw_p, mock.patch(
            "notemd.picker.read_key", side_effect=OSError("terminal gone")
        ):
            with self.assertRaises(OSError):
                pick_note(ROOT, search=_static_search(["a.md"]), stdin_fd=0, stdout_fd=1)

        setattr_mock.assert_called_once()
        self.assertEqual(write_mock.call_args_list[-1].args, (1, LEAVE_TUI_SEQUENCE))

    def test_pick_note_returns_selected_path(self) -> None:
        getattr_p, setraw_p, setattr_p, write_p, draw_p = self._patch_terminal()
        keys = iter(["ESC", "ENTER"])
        with getattr_p, setraw_p, setattr_p as setattr_mock, write_p, draw_p as draw_mock, mock.patch(
            "notemd.picker.read_key", side_effect=lambda _fd: next(keys)
        ):
            chosen = pick_note(ROOT, search=_static_search(["a.md", "b.md"]), stdin_fd=0, stdout_fd=1)

        self.assertEqual(chosen, ROOT / "a.md")
        setattr_mock.assert_called_once()
        self.assertTrue(draw_mock.called)


if __name__ == "__main__":
    unittest.main()
