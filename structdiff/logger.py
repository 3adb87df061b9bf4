"""Minimal logging utilities for structdiff.

Library modules only create loggers; handlers and levels are configured by
the application (the command-line front end does it in cli.main).

Example:
    >>> from structdiff.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Comparing documents")
"""

import logging

PACKAGE_LOGGER = "structdiff"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "structdiff." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'structdiff.mymodule'
    """
    if not (name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + ".")):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure(verbosity: int = 0) -> None:
    """Configure logging for command-line use.

    0 → WARNING, 1 → INFO, 2 or more → DEBUG.  Records go to stderr so
    that diff lines on stdout stay machine-readable.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
