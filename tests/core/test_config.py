from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from termlog.config import (
    FILE_TIME_FORMAT,
    TERMINAL_TIME_FORMAT,
    LoggerConfig,
    resolve_logger_config,
)
from termlog.models import LogLevel


def test_defaults() -> None:
    cfg = LoggerConfig()
    assert cfg.min_level is LogLevel.INFO
    assert cfg.trim_marker == "..."
    assert cfg.progress_interval is None
    assert cfg.strip_messages is False
    assert cfg.resolved_time_format(is_terminal=True) == TERMINAL_TIME_FORMAT
    assert cfg.resolved_time_format(is_terminal=False) == FILE_TIME_FORMAT


def test_empty_time_format_disables_timestamps() -> None:
    cfg = LoggerConfig(time_format="")
    assert cfg.resolved_time_format(is_terminal=True) == ""
    assert cfg.resolved_time_format(is_terminal=False) == ""


def test_level_names_and_style_keys_are_parsed() -> None:
    cfg = LoggerConfig(min_level="Warn", styles={"error": "bold red", "info": None})
    assert cfg.min_level is LogLevel.WARNING
    assert cfg.styles == {LogLevel.ERROR: "bold red", LogLevel.INFO: None}


def test_interval_accepts_seconds() -> None:
    cfg = LoggerConfig(progress_interval=0.25)
    assert cfg.progress_interval == timedelta(milliseconds=250)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_level": "loud"},
        {"styles": {"info": "not a colour at all"}},
        {"timestamp_style": "bold nonsense-colour"},
        {"progress_interval": -1},
        {"color_system": "16m"},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        LoggerConfig(**kwargs)


def test_config_is_frozen() -> None:
    cfg = LoggerConfig()
    with pytest.raises(ValidationError):
        cfg.trim_marker = "~"


def test_resolve_without_env_returns_same_object() -> None:
    cfg = LoggerConfig(trim_marker="~")
    assert resolve_logger_config(cfg) is cfg


def test_resolve_applies_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERMLOG_LEVEL", "debug")
    monkeypatch.setenv("TERMLOG_TIME_FORMAT", "")
    monkeypatch.setenv("TERMLOG_STRIP", "yes")
    monkeypatch.setenv("TERMLOG_TRIM_MARKER", "…")
    monkeypatch.setenv("TERMLOG_PROGRESS_INTERVAL", "0.1")
    monkeypatch.setenv("TERMLOG_COLOR_SYSTEM", "256")
    monkeypatch.setenv("NO_COLOR", "1")

    cfg = resolve_logger_config(LoggerConfig(min_level="error"))

    assert cfg.min_level is LogLevel.DEBUG
    assert cfg.time_format == ""
    assert cfg.strip_messages is True
    assert cfg.trim_marker == "…"
    assert cfg.progress_interval == timedelta(milliseconds=100)
    assert cfg.color_system == "256"
    assert cfg.no_color is True


@pytest.mark.parametrize(
    ("name", "value", "match"),
    [
        ("TERMLOG_LEVEL", "shouty", "TERMLOG_LEVEL"),
        ("TERMLOG_STRIP", "maybe", "TERMLOG_STRIP"),
        ("TERMLOG_PROGRESS_INTERVAL", "soon", "TERMLOG_PROGRESS_INTERVAL"),
        ("TERMLOG_PROGRESS_INTERVAL", "-2", "TERMLOG_PROGRESS_INTERVAL"),
        ("TERMLOG_COLOR_SYSTEM", "cga", "TERMLOG_COLOR_SYSTEM"),
    ],
)
def test_resolve_rejects_bad_env(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, match: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=match):
        resolve_logger_config()
