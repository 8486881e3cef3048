"""Logging setup for the command-line entrypoint.

Library modules only create loggers; handlers are attached here once.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "jarviewer"
CONSOLE_FORMAT = "%(levelname)s | %(message)s"
_HANDLER_ATTR = "_jarviewer_handler"


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Repeated calls only adjust the level, so handlers never stack up.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            if stream is not None and isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)
            return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
