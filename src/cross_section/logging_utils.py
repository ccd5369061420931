"""Logging setup for the command-line and server entry points."""

import logging
import sys


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``cross_section`` logger.

    The library modules only create loggers; handlers are installed here so
    embedding applications keep control of their own logging.
    """
    logger = logging.getLogger("cross_section")
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    if numeric_level <= logging.DEBUG:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    else:
        fmt = "%(levelname)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
