"""
Command-line interface for the mystats package.

This module provides the main CLI entry point for the statistics historian.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
