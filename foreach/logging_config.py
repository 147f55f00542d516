"""Logging setup for the command-line tool.

Everything goes to stderr: stdout is shared with the child processes and
must carry only their output.
"""

import logging
import sys

from .rules import PROGRAM_NAME


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the ``foreach`` logger with a single stderr handler.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"WARNING"``.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("foreach")
    logger.setLevel(getattr(logging, level, logging.WARNING))

    # Clear existing handlers so repeated calls don't duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=f"{PROGRAM_NAME}: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: The name for the logger (typically __name__ of the module).

    Returns:
        A logger instance.
    """
    return logging.getLogger(name)
