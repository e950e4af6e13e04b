"""Bridge from the stdlib `logging` module into a termlog Logger."""

from __future__ import annotations

import logging

from .logger import Logger
from .models import LogLevel


def level_for_record(levelno: int) -> LogLevel:
    """Map a stdlib level number onto the closest termlog level."""
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= logging.INFO:
        return LogLevel.INFO
    if levelno >= logging.DEBUG:
        return LogLevel.DEBUG
    return LogLevel.TRACE


class TermlogHandler(logging.Handler):
    """Render stdlib log records through a termlog Logger.

    CRITICAL records are written as FATAL lines but never exit the process;
    the timestamp comes from the termlog Logger, so the formatter should only
    format the message itself.
    """

    def __init__(self, target: Logger | None = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target = target if target is not None else Logger()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.target.emit(level_for_record(record.levelno), self.format(record))
        except Exception:
            self.handleError(record)
