"""
Storage Layer - Project file trees and conversations, both in SQLite.

The action engine talks to file trees through the DocumentStore protocol;
FileStore is the bundled implementation.
"""

from polaris.storage.base import DocumentStore
from polaris.storage.conversations import ConversationStore
from polaris.storage.files import FileStore

__all__ = [
    "DocumentStore",
    "ConversationStore",
    "FileStore",
]
