"""
Core module - Configuration, types, exceptions, prompts and LLM access.
"""

from polaris.core.config import settings
from polaris.core.llm import call_llm
from polaris.core.types import (
    Conversation,
    CreateFileAction,
    FileNode,
    Message,
    MessageEvent,
    NodeType,
    ParsedActions,
    Project,
    UpdateFileAction,
)

__all__ = [
    "settings",
    "call_llm",
    "Conversation",
    "CreateFileAction",
    "FileNode",
    "Message",
    "MessageEvent",
    "NodeType",
    "ParsedActions",
    "Project",
    "UpdateFileAction",
]
