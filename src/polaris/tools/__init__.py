"""
Tools - helpers exposed to the assistant and the CLI.
"""

from polaris.tools.files import list_files

__all__ = [
    "list_files",
]
