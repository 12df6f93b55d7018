"""Logging setup for the ``renpy_transcoder`` package."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "renpy_transcoder"
LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"


def _level_for(verbose: bool | None) -> int:
    if verbose is True:
        return logging.DEBUG
    if verbose is False:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    verbose: bool | None = False,
    log_file: str | None = None,
) -> None:
    """Attach stderr (and optionally file) handlers to the package logger.

    ``verbose=True`` means DEBUG, which includes one record per script line
    the parser skips; ``False`` means WARNING; ``None`` means INFO, which
    adds a record per loaded script.

    The handlers are installed once.  Later calls do not add handlers (or
    open *log_file*) again; they only move the logger and its existing
    handlers to the new level.
    """
    level = _level_for(verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    fmt = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(fmt)
        logger.addHandler(handler)
