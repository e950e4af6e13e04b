from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from datetime import timedelta
from typing import Any, TextIO

from termlog.config import LoggerConfig
from termlog.logger import Logger
from termlog.models import LogLevel

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = os.getenv("TERMLOG_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_level(s: str) -> LogLevel:
    try:
        return LogLevel.parse(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _parse_interval(s: str) -> timedelta:
    try:
        seconds = float(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("interval must be a number of seconds") from e
    if seconds < 0:
        raise argparse.ArgumentTypeError("interval must be >= 0")
    return timedelta(seconds=seconds)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="termlog",
        description="Log lines from stdin with timestamps, colours and an optional progress line.",
    )
    p.add_argument("--level", type=_parse_level, default=None, help="Minimum level (default: info)")
    p.add_argument(
        "--line-level",
        type=_parse_level,
        default=LogLevel.INFO,
        help="Level used for each input line (default: info)",
    )
    p.add_argument("--progress", action="store_true", help="Show each input line as a progress line")
    p.add_argument("--interval", type=_parse_interval, default=None, help="Min seconds between progress updates")
    p.add_argument("--time-format", default=None, help="strftime pattern; '' disables timestamps")
    p.add_argument("--strip", action="store_true", help="Strip surrounding whitespace from each line")
    p.add_argument("--trim-marker", default=None, help="Suffix for lines cut to the terminal width")
    p.add_argument("--no-color", action="store_true", help="Disable colours")
    return p


def _config_from_args(args: argparse.Namespace) -> LoggerConfig:
    values: dict[str, Any] = {}
    if args.level is not None:
        values["min_level"] = args.level
    if args.interval is not None:
        values["progress_interval"] = args.interval
    if args.time_format is not None:
        values["time_format"] = args.time_format
    if args.strip:
        values["strip_messages"] = True
    if args.trim_marker is not None:
        values["trim_marker"] = args.trim_marker
    if args.no_color:
        values["no_color"] = True
    return LoggerConfig(**values)


def run(args: argparse.Namespace, stdin: TextIO, out: TextIO) -> int:
    """Feed every stdin line through a Logger writing to `out`; return the line count."""
    log = Logger(out, _config_from_args(args))

    count = 0
    for raw in stdin:
        line = raw.rstrip("\r\n")
        count += 1
        if args.progress:
            log.progress("[%d] %s", count, line)
        else:
            log.log(args.line_level, line)

    if args.progress:
        log.info("processed %d lines", count)
    return count


def main(argv: Sequence[str] | None = None) -> None:
    _configure_logging()
    args = build_parser().parse_args(argv)

    try:
        count = run(args, sys.stdin, sys.stderr)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)
    except KeyboardInterrupt:
        raise SystemExit(130)

    LOGGER.debug("termlog processed %d lines", count)


if __name__ == "__main__":
    main()
