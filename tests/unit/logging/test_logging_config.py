"""Tests for the rotating log file setup."""

from __future__ import annotations

import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from notemd.logging_config import LOG_FILENAME, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app_logger = logging.getLogger("notemd")
        self.previous_level = self.app_logger.level

    def tearDown(self) -> None:
        self.app_logger.setLevel(self.previous_level)

    def _configure(self, verbose: bool, log_dir: Path) -> RotatingFileHandler:
        handler = configure_logging(verbose, log_dir)
        self.addCleanup(handler.close)
        self.addCleanup(self.app_logger.removeHandler, handler)
        return handler

    def test_records_go_to_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = Path(tmp) / "logs"
            handler = self._configure(False, log_dir)

            logging.getLogger("notemd.search").info("searched %d notes", 3)
            logging.getLogger("notemd.search").debug("hidden detail")
            handler.flush()

            text = (log_dir / LOG_FILENAME).read_text(encoding="utf-8")
            self.assertIn("[INFO] notemd.search: searched 3 notes", text)
            self.assertNotIn("hidden detail", text)
            handler.close()

    def test_verbose_enables_debug(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            handler = self._configure(True, Path(tmp))

            self.assertEqual(handler.level, logging.DEBUG)
            self.assertEqual(self.app_logger.level, logging.DEBUG)
            handler.close()


if __name__ == "__main__":
    unittest.main()
