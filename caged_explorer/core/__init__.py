"""Core services for the CAGED Explorer application."""

from .config import ConfigManager

__all__ = ["ConfigManager"]
