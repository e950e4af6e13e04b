"""Core data models: severity levels and the single-line message value."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import IntEnum

_ALIASES = {
    "WARN": "WARNING",
    "ERR": "ERROR",
    "CRITICAL": "FATAL",
}


class LogLevel(IntEnum):
    """Ordered severity levels.

    PROGRESS ranks lowest but is never subject to minimum-level filtering;
    progress lines are gated on the sink being an interactive terminal instead.
    """

    PROGRESS = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6

    @classmethod
    def parse(cls, name: str | int | LogLevel) -> LogLevel:
        """Resolve a level from a name (case-insensitive), alias or rank."""
        if isinstance(name, LogLevel):
            return name
        if isinstance(name, int):
            return cls(name)

        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError as e:
            allowed = ", ".join(m.name for m in cls)
            raise ValueError(f"Invalid level {name!r}. Allowed: {allowed}") from e


@dataclass(frozen=True, slots=True)
class Message:
    """One rendered log line before its terminator."""

    timestamp: str = ""
    prefix: str = ""  # level symbol, file output only
    text: str = ""

    def __str__(self) -> str:
        return " ".join(f for f in (self.timestamp, self.prefix, self.text) if f)

    def fit(
        self,
        width: int,
        trim_marker: str,
        measure: Callable[[str], int] = len,
    ) -> Message:
        """Return a copy whose text is cut so the whole line fits `width` cells.

        A cut text gets `trim_marker` appended. When the overflow is larger than
        the text itself the result can be just the marker (or shorter); callers
        must accept a line that still exceeds `width` in that case.
        """
        separators = 1 if self.timestamp else 0
        space_left = (
            width
            - measure(self.timestamp)
            - measure(self.prefix)
            - measure(self.text)
            - separators
        )
        if space_left >= 0:
            return self

        max_text = max(len(self.text) + space_left - len(trim_marker), 0)
        return replace(self, text=self.text[:max_text] + trim_marker)
