"""Logging configuration for the whole application."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(log_level: str = 'INFO'):
    """Attach a stdout handler to the package logger.

    Safe to call more than once; the handler is only installed the first time.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger('reviewboard')
    logger.setLevel(level)

    if not any(getattr(h, '_reviewboard', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._reviewboard = True
        logger.addHandler(handler)

    return logger
