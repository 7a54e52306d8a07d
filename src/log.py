"""Log utilities."""

import logging
import os

from rich.logging import RichHandler

LOG_LEVEL_ENV_VAR = "ANYCODER_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Retrieve logger with the provided name.

    The level defaults to DEBUG and can be overridden by setting the
    ANYCODER_LOG_LEVEL environment variable to a standard level name.
    """
    logger = logging.getLogger(name)
    logger.setLevel(os.environ.get(LOG_LEVEL_ENV_VAR, "DEBUG").upper())
    logger.handlers = [RichHandler()]
    logger.propagate = False
    return logger
