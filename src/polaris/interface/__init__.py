"""
Interface Layer - Command-line entry point.
"""

from polaris.interface.cli import app

__all__ = [
    "app",
]
