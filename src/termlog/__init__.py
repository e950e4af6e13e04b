"""Leveled terminal/file logging with an overwritable progress line."""

from __future__ import annotations

from .config import LoggerConfig, resolve_logger_config
from .handler import TermlogHandler
from .logger import FATAL_EXIT_CODE, Logger
from .models import LogLevel, Message
from .sinks import Sink, StreamSink
from .styles import StyleTable, display_width, level_symbol

__all__ = [
    "FATAL_EXIT_CODE",
    "LogLevel",
    "Logger",
    "LoggerConfig",
    "Message",
    "Sink",
    "StreamSink",
    "StyleTable",
    "TermlogHandler",
    "display_width",
    "level_symbol",
    "resolve_logger_config",
]
