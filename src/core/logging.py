"""
Logging for the SQL agent.

Every module logger lives under the ``src`` package logger, which owns the
one stdout handler.  Translator, engine and API lines therefore share a
format and a level, both taken from settings.
"""
from __future__ import annotations

import logging
import sys

from src.core.config import get_settings

_PACKAGE_LOGGER = "src"


def _package_logger() -> logging.Logger:
    settings = get_settings()
    root = logging.getLogger(_PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(settings.log_format, datefmt=settings.log_datefmt))
        root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for *name*, nested under the package logger when it is not already."""
    root = _package_logger()
    if name == _PACKAGE_LOGGER or name.startswith(_PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return root.getChild(name)
