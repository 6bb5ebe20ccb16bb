"""Console logging utilities for the report pipeline.

Library modules log through ``logging.getLogger(__name__)``; this module
installs the colored console handler used by the command line and provides
the status printer used for progress lines.
"""

import logging
import sys
from typing import Optional


class bcolors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    SYSTEM = "\033[90m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


LEVEL_COLORS = {
    logging.DEBUG: bcolors.SYSTEM,
    logging.INFO: bcolors.OKBLUE,
    logging.WARNING: bcolors.WARNING,
    logging.ERROR: bcolors.FAIL,
    logging.CRITICAL: bcolors.FAIL + bcolors.BOLD,
}


class ColorFormatter(logging.Formatter):
    """Wraps each formatted record in the color of its level."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{bcolors.ENDC}"


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """Attach a colored console handler to the ``perfreport`` logger.

    Args:
        verbose: Log debug records (join decisions) as well as summaries
        stream: Destination stream, stderr by default

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("perfreport")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        if getattr(handler, "_perfreport_console", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColorFormatter("%(levelname)s %(name)s: %(message)s"))
    handler._perfreport_console = True
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def print_status(message: str, color: Optional[str] = None) -> None:
    """Print a progress line to stdout, optionally colored."""
    if color:
        print(f"{color}{message}{bcolors.ENDC}")
    else:
        print(message)


__all__ = [
    "bcolors",
    "ColorFormatter",
    "configure_logging",
    "print_status",
]
