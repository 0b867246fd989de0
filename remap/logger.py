"""
Unified Logging Module
======================

Single place to configure and fetch loggers for the remap package.

Usage:
    from remap.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Processing file: %s", filename)
    logger.warning("Skipping unsupported file %s", path)
    logger.error("Error sanitizing %s: %s", path, error)
"""

import logging
import sys
from typing import Optional, Union

# Default log format with timestamp, level, and module name
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO

ROOT_LOGGER_NAME = "remap"

# Global flag to track if root logger has been configured
_root_configured = False


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the project root logger.

    Runs once; guarded by the module-level ``_root_configured`` flag.
    """
    global _root_configured
    if _root_configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(DEFAULT_LEVEL)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger for ``name``, usually the calling module's ``__name__``.

    Loggers outside the ``remap`` namespace (e.g. ``app.cli``) are parented
    under it so they share the project handler.
    """
    _configure_root_logger()

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


def set_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Set the level of the project root logger or of one named logger.

    Examples:
        set_level(logging.DEBUG)                   # all remap modules
        set_level("DEBUG", "remap.pipeline")       # pipeline only
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(level)
