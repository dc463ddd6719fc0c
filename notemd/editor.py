"""Editor launch helper for opening the chosen note.

Runs the configured editor on the note and waits for it to exit. Returns an
error message string instead of raising, for friendly CLI reporting.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from .config import load_editor_command

logger = logging.getLogger(__name__)


def launch_editor(target: Path, command: str | None = None) -> str | None:
    editor_command = load_editor_command() if command is None else command
    try:
        cmd = shlex.split(editor_command)
    except ValueError as exc:
        return f"Cannot edit: invalid editor command {editor_command!r}: {exc}"
    if not cmd:
        return "Cannot edit: editor command is empty."

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return f"Cannot create directory for {target}: {exc}"

    logger.info("Opening %s with %s", target, cmd[0])
    try:
        proc = subprocess.run([*cmd, str(target)], check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    if proc.returncode != 0:
        logger.warning("Editor exited with status %d", proc.returncode)
    return None
