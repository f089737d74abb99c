"""Command-line interface for CAGED Explorer."""

from .main import cli, main

__all__ = ["cli", "main"]
