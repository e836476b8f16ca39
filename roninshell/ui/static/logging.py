#!/usr/bin/env python3
# roninshell/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from roninshell.ui.utils import PRINT_MUTEX, color_enabled, colorize, strip_ansi

CONSOLE_FORMAT = "roninshell: %(levelname)s: %(message)s"
# pid, thread, level and logger name once debugging
CONSOLE_DEBUG_FORMAT = "[%(process)d/%(threadName)s] %(levelname)5s {%(name)s} -- %(message)s"
FILE_FORMAT = "%(asctime)s [%(process)d] %(levelname)-8s %(name)s: %(message)s"

LEVEL_ATTRIBUTES: dict[int, tuple[str, ...]] = {
    logging.DEBUG: ("dark", "white"),
    logging.INFO: (),
    logging.WARNING: ("yellow",),
    logging.ERROR: ("red",),
    logging.CRITICAL: ("bold", "red"),
}


class ColorizingStreamHandler(logging.StreamHandler):
    """Terminal handler: one color per level, plain text when color is off."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not color_enabled():
            return strip_ansi(message)
        return colorize(message, *LEVEL_ATTRIBUTES.get(record.levelno, ()))

    def emit(self, record: logging.LogRecord) -> None:
        with PRINT_MUTEX:
            super().emit(record)


class PlainFormatter(logging.Formatter):
    """Formatter for log files: no escape sequences."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _handler_of(logger: logging.Logger, kind: type) -> Optional[logging.Handler]:
    return next((h for h in logger.handlers if type(h) is kind), None)


def init_logger(
    name: str = "roninshell",
    level: int = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return the shell's logger.

    Records go to stderr through a ColorizingStreamHandler and, when
    `logfile` is given, to a rotating UTF-8 file at DEBUG. Calling this again
    re-targets the console handler at the current sys.stderr and applies the
    new level instead of stacking handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    console = _handler_of(logger, ColorizingStreamHandler)
    if console is None:
        console = ColorizingStreamHandler(sys.stderr)
        logger.addHandler(console)
    else:
        console.setStream(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(
        CONSOLE_DEBUG_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT))

    if logfile and _handler_of(logger, RotatingFileHandler) is None:
        to_file = RotatingFileHandler(logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
        to_file.setLevel(logging.DEBUG)
        to_file.setFormatter(PlainFormatter(FILE_FORMAT))
        logger.addHandler(to_file)

    return logger
