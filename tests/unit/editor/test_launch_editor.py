"""Tests for launching the editor on a chosen note."""

from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from notemd.editor import launch_editor


class LaunchEditorTests(unittest.TestCase):
    def test_runs_editor_command_with_target_and_creates_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "projects" / "idea.md"
            completed = subprocess.CompletedProcess(args=[], returncode=0)
            with mock.patch("notemd.editor.subprocess.run", return_value=completed) as run_mock:
                error = launch_editor(target, "nvim -c 'set ft=markdown'")

            self.assertIsNone(error)
            self.assertTrue(target.parent.is_dir())
            run_mock.assert_called_once_with(["nvim", "-c", "set ft=markdown", str(target)], check=False)

    def test_empty_command_is_reported(self) -> None:
        with mock.patch("notemd.editor.subprocess.run") as run_mock:
            error = launch_editor(Path("/tmp/x.md"), "   ")

        self.assertEqual(error, "Cannot edit: editor command is empty.")
        run_mock.assert_not_called()

    def test_unparsable_command_is_reported(self) -> None:
        error = launch_editor(Path("/tmp/x.md"), "vim 'unterminated")
        self.assertIsNotNone(error)
        self.assertIn("invalid editor command", error)

    def test_missing_editor_binary_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("notemd.editor.subprocess.run", side_effect=FileNotFoundError("nope")):
                error = launch_editor(Path(tmp) / "x.md", "no-such-editor")

        self.assertEqual(error, "Failed to launch editor: nope")

    def test_configured_command_is_used_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            completed = subprocess.CompletedProcess(args=[], returncode=1)
            with mock.patch("notemd.editor.load_editor_command", return_value="ed"), mock.patch(
                "notemd.editor.subprocess.run", return_value=completed
            ) as run_mock:
                error = launch_editor(Path(tmp) / "x.md")

        self.assertIsNone(error)
        self.assertEqual(run_mock.call_args.args[0][0], "ed")


if __name__ == "__main__":
    unittest.main()
