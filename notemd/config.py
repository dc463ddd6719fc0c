"""Persistent JSON config helpers.

Stores the notes directory, note extension, editor command and UI theme.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "notemd"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_NOTE_EXTENSION = ".md"
DEFAULT_EDITOR = "vi"


def default_note_directory() -> Path:
    return Path.home() / ".notes"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot (``""`` stays empty)."""
    stripped = extension.strip().lstrip(".")
    return f".{stripped}" if stripped else ""


def load_note_directory() -> Path:
    """Return the configured notes directory, ``~/.notes`` by default."""
    value = _load_string("note_directory")
    if value is None:
        return default_note_directory()
    return Path(value).expanduser()


def save_note_directory(directory: Path) -> None:
    """Remember ``directory`` as the default notes directory."""
    _save_string("note_directory", str(directory))


def load_note_extension() -> str:
    value = _load_string("note_extension")
    if value is None:
        return DEFAULT_NOTE_EXTENSION
    return normalize_extension(value)


def load_editor_command() -> str:
    """Return the editor command line.

    The config ``editor`` key wins, then ``$VISUAL``, then ``$EDITOR``,
    then ``vi``.
    """
    configured = _load_string("editor")
    if configured is not None:
        return configured
    for env_name in ("VISUAL", "EDITOR"):
        value = os.environ.get(env_name, "").strip()
        if value:
            return value
    return DEFAULT_EDITOR


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")
