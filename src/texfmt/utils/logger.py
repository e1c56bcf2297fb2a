"""Minimal logging utilities for texfmt.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from texfmt.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Formatting document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "texfmt." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("editor").name
        'texfmt.editor'
    """
    if not (name == "texfmt" or name.startswith("texfmt.")):
        name = f"texfmt.{name}"
    return logging.getLogger(name)
