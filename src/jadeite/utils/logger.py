"""Logging helper for jadeite.

Wraps the standard library logging so every jadeite logger lives under the
``jadeite`` namespace. jadeite never installs handlers itself; applications
opt in with ``logging.getLogger("jadeite").setLevel(...)``.

Example:
    >>> from jadeite.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving import %s", path)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``jadeite``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'jadeite.mymodule'
        >>> get_logger("jadeite.compiler").name
        'jadeite.compiler'
    """
    if not (name == "jadeite" or name.startswith("jadeite.")):
        name = f"jadeite.{name}"
    return logging.getLogger(name)
