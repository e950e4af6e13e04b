"""Level symbols, colour styles and display-width measurement."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

from .models import LogLevel

ColorSystemName = Literal["standard", "256", "truecolor"]

_COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "standard": ColorSystem.STANDARD,
    "256": ColorSystem.EIGHT_BIT,
    "truecolor": ColorSystem.TRUECOLOR,
}

_SYMBOLS: dict[LogLevel, str] = {
    LogLevel.TRACE: "TRC",
    LogLevel.DEBUG: "DBG",
    LogLevel.INFO: "INF",
    LogLevel.WARNING: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.FATAL: "FTL",
}

UNKNOWN_SYMBOL = "???"

DEFAULT_TIMESTAMP_STYLE = "#808080"

# INFO is left plain on purpose; it renders in the terminal's own colour.
DEFAULT_LEVEL_STYLES: Mapping[LogLevel, str] = MappingProxyType(
    {
        LogLevel.PROGRESS: "#808080",
        LogLevel.TRACE: "#808080",
        LogLevel.DEBUG: "#808080",
        LogLevel.WARNING: "#ffff80",
        LogLevel.ERROR: "#ff0000",
        LogLevel.FATAL: "#ff0000",
    }
)


def level_symbol(level: LogLevel) -> str:
    """Three-letter code used in file output, `???` for unknown levels."""
    return _SYMBOLS.get(level, UNKNOWN_SYMBOL)


def level_prefix(level: LogLevel) -> str:
    return f"|{level_symbol(level)}|"


def display_width(text: str) -> int:
    """Terminal cells occupied by `text`, ignoring ANSI escape sequences."""
    if not text:
        return 0
    return Text.from_ansi(text).cell_len


@dataclass(frozen=True, slots=True)
class StyleTable:
    """Read-only style lookup shared by every emit of one logger."""

    levels: Mapping[LogLevel, Style] = field(default_factory=lambda: MappingProxyType({}))
    timestamp: Style | None = None
    color_system: ColorSystem = ColorSystem.TRUECOLOR

    @classmethod
    def build(
        cls,
        *,
        overrides: Mapping[LogLevel, str | None] | None = None,
        timestamp_style: str | None = DEFAULT_TIMESTAMP_STYLE,
        color_system: ColorSystemName = "truecolor",
        no_color: bool = False,
    ) -> StyleTable:
        """Merge per-level overrides onto the defaults and parse them once.

        An override of `None` (or an empty string) removes the level's style.
        """
        if no_color:
            return cls(color_system=_COLOR_SYSTEMS[color_system])

        merged: dict[LogLevel, str | None] = dict(DEFAULT_LEVEL_STYLES)
        if overrides:
            merged.update(overrides)

        levels = {level: Style.parse(definition) for level, definition in merged.items() if definition}
        return cls(
            levels=MappingProxyType(levels),
            timestamp=Style.parse(timestamp_style) if timestamp_style else None,
            color_system=_COLOR_SYSTEMS[color_system],
        )

    def style(self, level: LogLevel) -> Style | None:
        return self.levels.get(level)

    def render(self, text: str, style: Style | None) -> str:
        """Wrap `text` in the escape sequences for `style`."""
        if style is None or not text:
            return text
        return style.render(text, color_system=self.color_system)

    def render_level(self, level: LogLevel, text: str) -> str:
        return self.render(text, self.style(level))

    def render_timestamp(self, text: str) -> str:
        return self.render(text, self.timestamp)
