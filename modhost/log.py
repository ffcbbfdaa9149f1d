"""
Logging setup for the host and its modules.

The host logs through the "modhost" logger hierarchy. Modules get child
loggers named after themselves ("modhost.module.<name>").
"""

import logging
import sys

ROOT_LOGGER = "modhost"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str | int = logging.INFO, stream=None) -> logging.Logger:
    """
    Configure the host logger.

    Safe to call more than once; the handler installed by a previous call is
    replaced rather than duplicated.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level
        stream: Output stream (default: stderr)

    Returns:
        The configured "modhost" logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        if getattr(handler, "_modhost", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler._modhost = True
    logger.addHandler(handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """Get the logger handed to a module."""
    return logging.getLogger(f"{ROOT_LOGGER}.module.{module_name}")
