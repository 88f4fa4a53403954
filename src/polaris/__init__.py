"""
Polaris

An AI coding assistant that turns chat messages into file changes.
The model answers in free text with embedded <create_file>/<update_file>
tags; Polaris extracts those actions and applies them to the project tree.
"""

__version__ = "0.1.0"
__author__ = "Polaris Team"

from polaris.actions import ApplyReport, apply_text, parse_actions
from polaris.core.config import settings
from polaris.core.types import (
    CreateFileAction,
    FileNode,
    MessageEvent,
    NodeType,
    ParsedActions,
    UpdateFileAction,
)

__all__ = [
    "settings",
    "ApplyReport",
    "apply_text",
    "parse_actions",
    "CreateFileAction",
    "FileNode",
    "MessageEvent",
    "NodeType",
    "ParsedActions",
    "UpdateFileAction",
]
