"""Logging helpers shared by the library and the command-line driver."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "pathforge") -> logging.Logger:
    """Return the module logger for ``name``."""
    return logging.getLogger(name)


def configure_logging(verbosity: int = 0) -> None:
    """Configure root logging once for CLI use.

    verbosity: -1 quiet (WARNING), 0 normal (INFO), 1+ verbose (DEBUG).
    """
    if verbosity < 0:
        level = logging.WARNING
    elif verbosity == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)
