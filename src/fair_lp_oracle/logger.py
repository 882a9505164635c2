"""Logging configuration for fair-lp-oracle."""

import logging
import os
import sys
from typing import TextIO

# Define TRACE level (lower than DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

NOISY_LOGGERS = ("web3", "urllib3", "asyncio")


class ColoredFormatter(logging.Formatter):
    """Level-coloured log formatter using ANSI escape codes."""

    COLORS = {
        "TRACE": "\033[90m",  # Dark gray
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"
            )
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def resolve_level(level: str | None) -> tuple[str, int]:
    """Map a level name to its numeric value, defaulting to INFO.

    ``level`` falls back to the LOG_LEVEL environment variable.
    """
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if name == "TRACE":
        return name, TRACE
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        return "INFO", logging.INFO
    return name, value


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Configure a single coloured handler on the root logger.

    Logs go to stdout unless another ``stream`` is given.
    At DEBUG the web3/urllib3 loggers are held at WARNING to reduce noise;
    use TRACE to see them as well.
    """
    name, numeric = resolve_level(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logging.basicConfig(level=numeric, handlers=[handler], force=True)

    if name == "TRACE":
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(TRACE)
    elif numeric <= logging.DEBUG:
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Usually __name__ of the calling module
    """
    return logging.getLogger(name)
