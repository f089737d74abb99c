"""Centralized logging configuration for CAGED Explorer.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "caged_explorer": logging.INFO,
    "caged_explorer.fretboard": logging.INFO,
    "caged_explorer.shapes": logging.INFO,  # Set to DEBUG to trace shape rotation
    "caged_explorer.clusters": logging.INFO,
    "caged_explorer.frying_pan": logging.INFO,
    "caged_explorer.reference": logging.INFO,
    "caged_explorer.explorer": logging.INFO,
    "caged_explorer.core": logging.WARNING,
    "caged_explorer.cli": logging.WARNING,
    "caged_explorer.ui": logging.WARNING,
    # Libraries/third-party
    "pyfiglet": logging.ERROR,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'caged_explorer' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler; sys.stdout may have been replaced since the last call
    if _console_handler is None or _console_handler.stream is not sys.stdout:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("caged_explorer"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Apply module-specific levels
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name if module_name else "")
        logger.setLevel(module_level)

        # Clear existing handlers and add the shared one
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_console_handler)
        logger.propagate = False

    logging.getLogger("caged_explorer").debug("Logging configuration complete")
