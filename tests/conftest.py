from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import pytest

from termlog.config import LoggerConfig
from termlog.logger import Logger


class FakeSink:
    """Always-interactive (or always-file) sink with a fixed width."""

    def __init__(self, *, is_terminal: bool = True, columns: int = 80) -> None:
        self.is_terminal = is_terminal
        self.columns = columns
        self.writes: list[str] = []
        self.flushed = 0
        self.fail_with: Exception | None = None

    def width(self) -> int:
        return self.columns

    def write(self, text: str) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.writes.append(text)
        return len(text)

    def flush(self) -> None:
        self.flushed += 1

    @property
    def output(self) -> str:
        return "".join(self.writes)


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 12, 30, 8, 12, 1)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TERMLOG_LEVEL",
        "TERMLOG_TIME_FORMAT",
        "TERMLOG_STRIP",
        "TERMLOG_TRIM_MARKER",
        "TERMLOG_PROGRESS_INTERVAL",
        "TERMLOG_COLOR_SYSTEM",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_logger(clock: FakeClock) -> Callable[..., tuple[Logger, FakeSink]]:
    def _make(
        *,
        is_terminal: bool = True,
        columns: int = 80,
        **config: object,
    ) -> tuple[Logger, FakeSink]:
        sink = FakeSink(is_terminal=is_terminal, columns=columns)
        log = Logger(config=LoggerConfig(**config), sink=sink, clock=clock)
        return log, sink

    return _make
