"""Logging setup shared by the binairo package."""

from __future__ import annotations

import logging
from typing import Optional, Union

# Root logger name for the whole package
LOGGER_NAME = "binairo"

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the package logger, or one of its children.

    The package logger gets a console handler at WARNING level the first
    time it is requested, unless a handler is already attached.

    Args:
        name: Dotted module name (e.g. ``__name__``). Names outside the
              package are nested under it.
    """
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    if name is None or name == LOGGER_NAME:
        return root
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: Union[int, str]) -> None:
    """Change the verbosity of the package logger."""
    if isinstance(level, str):
        level = level.upper()
    get_logger().setLevel(level)
