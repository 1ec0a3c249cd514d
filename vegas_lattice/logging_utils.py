"""
Logging setup for command line use.

Library modules only create loggers (``logging.getLogger(__name__)``); they
never configure handlers. Front ends call ``configure_logging``.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level: 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Send vegas_lattice log records to standard error.

    Standard output is left alone so lattices can be piped between commands.
    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger('vegas_lattice')
    for handler in list(logger.handlers):
        if getattr(handler, '_vegas_lattice', False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._vegas_lattice = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
