"""
Logging configuration for qqmusic-lookup.

Output goes to two places:
    - Console (stderr): compact colored "LEVEL: message" lines, so stdout
      stays clean for the formatted results printed by the CLI.
    - Optional log file: every record at DEBUG and above with timestamps.

Usage:
    from qqmusic_lookup.core.logger import setup_logging, get_logger

    setup_logging("INFO")  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Fetching chart")
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Fore, Style


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

# Third-party loggers that are too chatty below WARNING
EXTERNAL_LOGGERS = ("aiohttp", "aiohttp.client", "aiohttp.access", "asyncio", "urllib3")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name for console output.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__(CONSOLE_LOG_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record, coloring the level name when enabled.

        The original record is left untouched so file handlers sharing it
        do not receive escape codes.
        """
        if not self.use_colors:
            return super().format(record)

        color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record_copy)


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    colored: bool = True,
    stream: TextIO | None = None
) -> None:
    """
    Configure the logging system for the application.

    Call once at startup, after the configuration is loaded.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file receiving every record at DEBUG and above.
                  Parent directories are created as needed.
        colored: Color level names on the console.
        stream: Console stream. Defaults to sys.stderr.

    Behavior:
        1. Set root logger level to DEBUG and remove existing handlers
        2. Add console handler at ``level`` with the compact format
        3. Add file handler (if requested) with the detailed format
        4. Raise third-party loggers to WARNING
    """
    if colored:
        colorama.init()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in EXTERNAL_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("qqmusic_lookup").debug(
        f"Logging initialized - Level: {level}, File: {log_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called propagate to the
        unconfigured root logger, so only warnings and errors reach stderr.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush, close and remove all root handlers.

    Typically called in a finally block at CLI exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
