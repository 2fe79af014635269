from __future__ import annotations

import logging
import os
from typing import Literal

import coloredlogs  # type: ignore[import]

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"
TRAFFIC_FORMAT = "%(asctime)s %(name)s:%(lineno)d %(levelname)s %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Loggers that stay quiet unless traffic logging is on.
NOISY_LOGGERS = ("paramiko",)


def resolve_level(verbose: bool = False) -> LogLevel:
    """Pick the log level: --verbose wins, then LOGLEVEL, then INFO."""
    if verbose:
        return "DEBUG"
    level = os.environ.get("LOGLEVEL", "INFO").upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
        return "INFO"
    return level  # type: ignore[return-value]


def setup_logging(verbose: bool = False) -> LogLevel:
    """Install coloredlogs on the root logger.

    At DEBUG every command sent to the processor and every raw response is
    logged, with the emitting module in the prefix.
    """
    level = resolve_level(verbose)
    coloredlogs.install(
        level=level,
        fmt=TRAFFIC_FORMAT if level == "DEBUG" else CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return level
