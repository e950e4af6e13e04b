"""Output sinks.

A sink is wherever log lines end up. The logger only needs to know two things
about it up front: whether it is an interactive terminal (styling and
single-line overwrite make sense) and, when it is, how wide it is right now.
"""

from __future__ import annotations

import io
import os
from typing import IO, Any, Protocol


class Sink(Protocol):
    """Destination for rendered log lines."""

    is_terminal: bool

    def width(self) -> int:
        """Current column count, or 0 when unknown."""
        ...

    def write(self, text: str) -> int:
        """Write `text` and return the amount written."""
        ...

    def flush(self) -> None:
        ...


def _isatty(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):  # closed or detached stream
        return False


class StreamSink:
    """Sink over a text or binary file-like object.

    The terminal check runs once; the width is queried on every call so that
    resizes are picked up between lines.
    """

    def __init__(self, stream: IO[Any], *, encoding: str = "utf-8") -> None:
        self.stream = stream
        self.encoding = encoding
        self.is_terminal = _isatty(stream)
        self._binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))

    def width(self) -> int:
        if not self.is_terminal:
            return 0
        try:
            return os.get_terminal_size(self.stream.fileno()).columns
        except (AttributeError, OSError, ValueError):
            return 0

    def write(self, text: str) -> int:
        if self._binary:
            n = self.stream.write(text.encode(self.encoding, errors="replace"))
        else:
            n = self.stream.write(text)
        return len(text) if n is None else n

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
