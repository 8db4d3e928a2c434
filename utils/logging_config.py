"""
Logging setup for VidSearch.

Every module logs through a child of the "vidsearch" logger, obtained with
get_logger(__name__). Console messages go to stderr so that search output
and reports written to stdout can be piped; an optional log file receives
the same messages with timestamps and the name of the scanning thread.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from .constants import (
    APP_LOGGER_NAME,
    CONSOLE_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    FILE_LOG_FORMAT,
)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy; a file handler may format the same record afterwards
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def level_from_flags(verbose: bool = False, debug: bool = False) -> int:
    """Map the -v/-d command-line flags to a logging level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the application logger.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Threshold for console and file output
        log_file: Optional file that also receives every message
        use_colors: Color level names when the console is a terminal
        stream: Console stream (stderr by default)

    Returns:
        The "vidsearch" logger

    Example:
        >>> logger = setup_logging(logging.INFO, Path("vidsearch.log"))
        >>> get_logger("processors.scanner").info("Found 12 subtitle files")
    """
    stream = stream or sys.stderr
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)

    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    formatter_class = ColoredFormatter if use_colors and stream.isatty() else logging.Formatter
    console_handler.setFormatter(formatter_class(CONSOLE_LOG_FORMAT))
    app_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
        app_logger.addHandler(file_handler)

    return app_logger


def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger below the application logger.

    Module names such as "processors.scanner" become
    "vidsearch.processors.scanner"; names already under "vidsearch" are
    used as given.
    """
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
