"""
Logging setup shared by the dropbench entry points.

Everything logs through the root logger; setup_logging() installs a single
stderr handler the first time it is called.
"""

import logging
import sys

# ANSI escape codes for colors
LEVEL_COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[41m",  # Red background
}
RESET_COLOR = "\033[0m"

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(module)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_handler: logging.Handler | None = None


class ColorFormatter(logging.Formatter):
    def format(self, record):
        levelname = record.levelname
        if levelname in LEVEL_COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{LEVEL_COLORS[levelname]}{levelname}{RESET_COLOR}"
        return super().format(record)


def setup_logging(color: bool = True, level: int | str = logging.WARNING, reconfigure: bool = False) -> logging.Logger:
    """
    Install the stderr handler on the root logger and set its level.

    Colors are only used when requested and stderr is a terminal. Calling
    again only changes the level unless ``reconfigure`` is set, in which
    case the handler is replaced.
    """
    global _handler
    logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level {level!r}")
    logger.setLevel(level)

    if _handler is not None and not reconfigure:
        return logger
    if _handler is not None:
        logger.removeHandler(_handler)

    if color and sys.stderr.isatty():
        formatter = ColorFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    else:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    _handler = logging.StreamHandler()
    _handler.setFormatter(formatter)
    logger.addHandler(_handler)
    return logger
