"""Logger configuration and environment overrides."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from .models import LogLevel
from .styles import DEFAULT_TIMESTAMP_STYLE, ColorSystemName

DEFAULT_TRIM_MARKER = "..."
TERMINAL_TIME_FORMAT = "%H:%M:%S"
FILE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _check_style(definition: str | None) -> str | None:
    if definition:
        try:
            Style.parse(definition)
        except StyleSyntaxError as e:
            raise ValueError(f"invalid style {definition!r}: {e}") from e
    return definition


class LoggerConfig(BaseModel):
    """Construction-time settings for a Logger. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    min_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Lines below this level are dropped. Progress lines are exempt.",
    )
    time_format: str | None = Field(
        default=None,
        description="strftime pattern; None picks one from the sink kind, '' disables timestamps.",
    )
    timestamp_style: str | None = DEFAULT_TIMESTAMP_STYLE
    styles: dict[LogLevel, str | None] = Field(
        default_factory=dict,
        description="Per-level rich style overrides; None removes a level's colour.",
    )
    strip_messages: bool = False
    trim_marker: str = DEFAULT_TRIM_MARKER
    progress_interval: timedelta | None = Field(
        default=None,
        description="Minimum time between two accepted progress lines (None = unlimited).",
    )
    color_system: ColorSystemName = "truecolor"
    no_color: bool = False

    @field_validator("min_level", mode="before")
    @classmethod
    def _parse_min_level(cls, v: Any) -> LogLevel:
        return LogLevel.parse(v)

    @field_validator("styles", mode="before")
    @classmethod
    def _parse_styles(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {LogLevel.parse(k): _check_style(s) for k, s in v.items()}

    @field_validator("timestamp_style")
    @classmethod
    def _parse_timestamp_style(cls, v: str | None) -> str | None:
        return _check_style(v)

    @field_validator("progress_interval")
    @classmethod
    def _check_interval(cls, v: timedelta | None) -> timedelta | None:
        if v is not None and v < timedelta(0):
            raise ValueError("progress_interval must be >= 0")
        return v

    def resolved_time_format(self, *, is_terminal: bool) -> str:
        if self.time_format is not None:
            return self.time_format
        return TERMINAL_TIME_FORMAT if is_terminal else FILE_TIME_FORMAT


def _env_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off)")


def resolve_logger_config(cfg: LoggerConfig | None = None) -> LoggerConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = LoggerConfig()

    update: dict[str, Any] = {}

    level = os.getenv("TERMLOG_LEVEL")
    if level:
        try:
            update["min_level"] = LogLevel.parse(level)
        except ValueError as exc:
            raise ValueError(f"TERMLOG_LEVEL: {exc}") from exc

    # An empty value is meaningful here: it turns timestamps off.
    time_format = os.getenv("TERMLOG_TIME_FORMAT")
    if time_format is not None:
        update["time_format"] = time_format

    strip = os.getenv("TERMLOG_STRIP")
    if strip:
        update["strip_messages"] = _env_bool("TERMLOG_STRIP", strip)

    marker = os.getenv("TERMLOG_TRIM_MARKER")
    if marker is not None:
        update["trim_marker"] = marker

    interval = os.getenv("TERMLOG_PROGRESS_INTERVAL")
    if interval:
        try:
            seconds = float(interval)
        except ValueError as exc:
            raise ValueError("TERMLOG_PROGRESS_INTERVAL must be a number of seconds") from exc
        if seconds < 0:
            raise ValueError("TERMLOG_PROGRESS_INTERVAL must be >= 0")
        update["progress_interval"] = timedelta(seconds=seconds)

    color_system = os.getenv("TERMLOG_COLOR_SYSTEM")
    if color_system:
        if color_system not in get_args(ColorSystemName):
            allowed = ", ".join(get_args(ColorSystemName))
            raise ValueError(f"TERMLOG_COLOR_SYSTEM must be one of: {allowed}")
        update["color_system"] = color_system

    # https://no-color.org: any non-empty value disables colour.
    if os.getenv("NO_COLOR"):
        update["no_color"] = True

    if not update:
        return cfg
    return cfg.model_copy(update=update)
