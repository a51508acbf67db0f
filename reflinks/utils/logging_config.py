"""
Logging configuration for the reflinks package.

All loggers live under the "reflinks" logger. Console output goes to stderr
so that fixed wikitext written to stdout stays clean.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import colorama
from colorama import Fore, Style

colorama.init(autoreset=True)

ROOT_LOGGER_NAME = "reflinks"
DEFAULT_LOG_FILE = "logs/reflinks.log"


class LogLevel(str, Enum):
    """Log level enumeration."""

    MINIMAL = "minimal"  # Only errors and warnings
    NORMAL = "normal"  # Fixed/skipped references and above
    DETAILED = "detailed"  # Per-reference decisions
    FULL = "full"  # Everything, including HTTP retries


_LEVELS = {
    LogLevel.MINIMAL: logging.WARNING,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.DETAILED: logging.DEBUG,
    LogLevel.FULL: logging.DEBUG,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of console records."""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        # Work on a copy so file handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def _console_handler(level: int, detailed: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if detailed:
        fmt = ColoredFormatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%H:%M:%S"
        )
    else:
        fmt = ColoredFormatter("%(levelname)-8s | %(message)s")
    handler.setFormatter(fmt)
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def setup_logging(
    level: Union[LogLevel, str] = LogLevel.NORMAL,
    log_to_file: bool = False,
    log_file: Optional[str] = None,
    verbose: bool = False,
    debug: bool = False,
) -> logging.Logger:
    """
    Configure the reflinks logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level, as LogLevel or its string value
        log_to_file: Whether to also log to a file
        log_file: Log file path (default: logs/reflinks.log)
        verbose: Show debug output with timestamps and logger names
        debug: Same as verbose

    Returns:
        The "reflinks" logger
    """
    level = LogLevel(level)
    detailed = verbose or debug
    log_level = logging.DEBUG if detailed else _LEVELS[level]

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    logger.addHandler(_console_handler(log_level, detailed or level == LogLevel.FULL))
    if log_to_file:
        logger.addHandler(_file_handler(log_file or DEFAULT_LOG_FILE))

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the reflinks logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
