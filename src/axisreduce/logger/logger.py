"""Package logger for axisreduce, configured from :mod:`axisreduce.core.config`."""

import logging
import sys

from axisreduce.core.config import settings

__all__ = ["logger", "setup_logger"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "axisreduce",
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure and return a logger writing to stdout.

    A logger that already has handlers is returned untouched, so repeated
    calls never stack handlers or override an earlier level.

    Args:
        name: Logger name; children of ``axisreduce`` share its prefix
        level: Log level name; defaults to ``settings.LOG_LEVEL``
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(fmt=format_string or LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    logger.propagate = False
    return logger


logger = setup_logger()
