"""
Logging configuration for zoomrecpage
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: str | None, verbose: bool = False) -> int:
    """Map a level name to a logging constant, falling back to INFO"""
    if verbose:
        return logging.DEBUG
    name = (level or "INFO").strip().upper()
    if name not in VALID_LEVELS:
        return logging.INFO
    return int(getattr(logging, name))


def setup_logging(level: str | None = "INFO", verbose: bool = False) -> None:
    """
    Configure logging for the handler and CLI

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        verbose: Enable verbose logging (DEBUG level)
    """
    logging.basicConfig(
        level=resolve_level(level, verbose),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Reduce noise from requests library
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
