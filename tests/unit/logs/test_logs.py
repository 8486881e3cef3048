"""Tests for package logging setup."""

from __future__ import annotations

import io
import logging
import unittest

from jarviewer.logs import LOGGER_NAME, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_repeated_calls_keep_single_handler(self) -> None:
        configure_logging()
        logger = configure_logging(verbose=True)

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_messages_use_console_format(self) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)

        logging.getLogger("jarviewer.archive.build").warning("orphan %s", "x/")
        logging.getLogger("jarviewer.archive.build").debug("hidden")

        self.assertEqual(stream.getvalue(), "WARNING | orphan x/\n")


if __name__ == "__main__":
    unittest.main()
