import logging
import os
import sys
from typing import Union

# Custom levels used across docsearch
TRACE_LEVEL = 5
SUCCESS_LEVEL = 25

logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")

LOG_LEVEL_ENV = "DOCSEARCH_LOG_LEVEL"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours each record by level when stderr is a terminal."""

    COLORS = {
        "TRACE": "\033[90m",  # Gray
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "SUCCESS": "\033[92m",  # Bright Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if sys.stderr.isatty():
            level_color = self.COLORS.get(record.levelname, "")
            return f"{level_color}{message}{self.COLORS['RESET']}"

        return message


def setup_colored_logging(level: Union[int, str, None] = None) -> None:
    """
    Configure the root logger with a single coloured stderr handler.

    Args:
        level: Logging level. When None, DOCSEARCH_LOG_LEVEL is consulted and
            INFO is used if it is unset.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()

    formatter = ColoredFormatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


class EnhancedLogger:
    """Logger wrapper adding the TRACE and SUCCESS levels."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def trace(self, msg, *args, **kwargs):
        """Very detailed debugging info (per-term scan results and the like)."""
        self._logger.log(TRACE_LEVEL, msg, *args, **kwargs)

    def success(self, msg, *args, **kwargs):
        """Completed work worth reporting, such as a finished directory load."""
        self._logger.log(SUCCESS_LEVEL, msg, *args, **kwargs)

    # Everything else goes straight to the wrapped logger
    def __getattr__(self, name):
        return getattr(self._logger, name)


def get_colored_logger(name: str) -> EnhancedLogger:
    """
    Get an enhanced logger instance with the custom levels.

    Args:
        name: Logger name (typically __name__)

    Returns:
        EnhancedLogger wrapping logging.getLogger(name)
    """
    return EnhancedLogger(logging.getLogger(name))
