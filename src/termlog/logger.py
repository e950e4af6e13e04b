"""Leveled logger with colourised terminal output and an overwritable progress line.

Rendering depends on the sink:
- Interactive terminal: short timestamp, coloured body, the line is cut to the
  terminal width, and progress lines end in `\\r` so the next line overwrites them.
- Anything else (files, pipes): long timestamp, `|LVL|` prefix, no colour, no
  cutting; progress lines are dropped entirely.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import IO, Any, NoReturn

from .config import LoggerConfig, resolve_logger_config
from .models import LogLevel, Message
from .sinks import Sink, StreamSink
from .styles import StyleTable, display_width, level_prefix

logger = logging.getLogger(__name__)

FATAL_EXIT_CODE = 1

Clock = Callable[[], datetime]


def _format(msg: object, args: tuple[Any, ...]) -> str:
    # Same convention as the stdlib logging module: only interpolate when args are given.
    text = str(msg)
    return text % args if args else text


class Logger:
    """Writes leveled lines to one sink.

    All emits on an instance are serialized by a single lock; the progress
    bookkeeping (last progress width and time) is read and updated together
    with the write of the line it describes.
    """

    def __init__(
        self,
        stream: IO[Any] | None = None,
        config: LoggerConfig | None = None,
        *,
        sink: Sink | None = None,
        clock: Clock | None = None,
    ) -> None:
        if sink is None:
            sink = StreamSink(stream if stream is not None else sys.stderr)
        self.sink = sink
        self.config = resolve_logger_config(config)
        self.time_format = self.config.resolved_time_format(is_terminal=sink.is_terminal)
        self.styles = StyleTable.build(
            overrides=self.config.styles,
            timestamp_style=self.config.timestamp_style,
            color_system=self.config.color_system,
            no_color=self.config.no_color,
        )
        self._clock: Clock = clock or datetime.now
        self._lock = threading.Lock()
        self._last_progress_width = 0
        self._last_progress_at: datetime | None = None

        logger.debug(
            "termlog logger created (terminal=%s, min_level=%s, time_format=%r)",
            sink.is_terminal,
            self.config.min_level.name,
            self.time_format,
        )

    @property
    def is_terminal(self) -> bool:
        return self.sink.is_terminal

    @property
    def width(self) -> int:
        """Live terminal width, 0 for non-interactive sinks."""
        return self.sink.width() if self.sink.is_terminal else 0

    @property
    def last_progress_width(self) -> int:
        return self._last_progress_width

    # Core

    def emit(self, level: LogLevel, text: str) -> int:
        """Render `text` at `level` and write it to the sink.

        Returns the amount written; 0 when the line was filtered out or
        throttled. Sink write errors propagate unchanged.
        """
        now = self._clock()
        is_progress = level == LogLevel.PROGRESS

        if is_progress:
            if not self.sink.is_terminal:
                return 0
        elif level < self.config.min_level:
            return 0

        with self._lock:
            if is_progress and self._throttled(now):
                return 0

            line, line_width = self._render(level, text, now)
            n = self.sink.write(line)

            # Only a line that reached the sink may change the bookkeeping.
            if self.sink.is_terminal:
                self._last_progress_width = line_width if is_progress else 0
            if is_progress:
                self._last_progress_at = now
            return n

    def _throttled(self, now: datetime) -> bool:
        interval = self.config.progress_interval
        if not interval or self._last_progress_at is None:
            return False
        return now - self._last_progress_at < interval

    def _render(self, level: LogLevel, text: str, now: datetime) -> tuple[str, int]:
        """Build the final line and return it with its rendered width (0 for files)."""
        msg = Message(
            timestamp=now.strftime(self.time_format) if self.time_format else "",
            text=text.strip() if self.config.strip_messages else text,
        )

        if not self.sink.is_terminal:
            return str(replace(msg, prefix=level_prefix(level))) + "\n", 0

        term_width = self.sink.width()
        if term_width > 0:
            msg = msg.fit(term_width, self.config.trim_marker, measure=display_width)

        # Style after fitting so escape sequences are never cut or counted.
        msg = replace(
            msg,
            timestamp=self.styles.render_timestamp(msg.timestamp),
            text=self.styles.render_level(level, msg.text),
        )
        line = str(msg)
        line_width = display_width(line)
        line += " " * self._padding(line_width, term_width)

        terminator = "\r" if level == LogLevel.PROGRESS else "\n"
        return line + terminator, line_width

    def _padding(self, line_width: int, term_width: int) -> int:
        """Spaces needed to blank out the tail of a longer progress line."""
        gap = self._last_progress_width - line_width
        if gap <= 0:
            return 0
        if term_width > 0:
            gap = min(gap, max(term_width - line_width, 0))
        return gap

    # Facade

    def log(self, level: LogLevel | str | int, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.parse(level), _format(msg, args))

    def trace(self, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.TRACE, _format(msg, args))

    def debug(self, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.DEBUG, _format(msg, args))

    def info(self, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.INFO, _format(msg, args))

    def warning(self, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.WARNING, _format(msg, args))

    warn = warning

    def error(self, msg: object, *args: Any) -> int:
        return self.emit(LogLevel.ERROR, _format(msg, args))

    def progress(self, msg: object, *args: Any) -> int:
        """Show a transient status line that the next line overwrites.

        Does nothing unless the sink is an interactive terminal.
        """
        if not self.sink.is_terminal:
            return 0
        return self.emit(LogLevel.PROGRESS, _format(msg, args))

    def fatal(self, msg: object, *args: Any) -> NoReturn:
        """Write a FATAL line, flush, and exit with status 1.

        The exit happens whether or not the line could be formatted or written.
        """
        try:
            self.emit(LogLevel.FATAL, _format(msg, args))
            self.sink.flush()
        except Exception as exc:
            logger.warning("termlog: fatal line could not be written: %r", exc)
        raise SystemExit(FATAL_EXIT_CODE)
