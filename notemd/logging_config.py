"""Logging configuration for notemd.

The picker owns the terminal while it runs, so log records go to a rotating
file rather than to stderr.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "notemd.log"


def default_log_dir() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False))


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> RotatingFileHandler:
    """Attach a rotating file handler to the ``notemd`` logger.

    Writes ``notemd.log`` (1MB max, 3 backups) under ``log_dir``, by default
    the platform log directory. ``verbose`` lowers the level to DEBUG.
    Returns the handler so it can be removed again.
    """
    directory = default_log_dir() if log_dir is None else log_dir
    directory.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if verbose else logging.INFO

    handler = RotatingFileHandler(
        str(directory / LOG_FILENAME),
        maxBytes=1_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    app_logger = logging.getLogger(APP_NAME)
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    return handler
