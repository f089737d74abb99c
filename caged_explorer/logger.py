"""Centralized lazy-loading logger access for CAGED Explorer."""
import logging
from typing import Dict

PACKAGE = "caged_explorer"

# Module-level cache for loggers
_logger_cache: Dict[str, logging.Logger] = {}


def _qualified(name: str) -> str:
    if name == PACKAGE or name.startswith(PACKAGE + "."):
        return name
    # '__main__' and script names still inherit the package handler and levels
    return f"{PACKAGE}.{name.strip('_') or 'main'}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        The cached logger for the qualified name
    """
    name = _qualified(name)
    if name not in _logger_cache:
        _logger_cache[name] = logging.getLogger(name)
    return _logger_cache[name]
