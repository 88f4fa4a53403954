"""
Tools - Base module with storage singletons.

Storage objects are created lazily on first use so that importing Polaris
never touches the data directory.
"""

from polaris.core.config import get_logger
from polaris.storage.conversations import ConversationStore
from polaris.storage.files import FileStore

logger = get_logger("tools")


# ============================================
# Singletons for storage
# ============================================

_file_store: FileStore | None = None
_conversation_store: ConversationStore | None = None


def _get_file_store() -> FileStore:
    global _file_store
    if _file_store is None:
        _file_store = FileStore()
    return _file_store


def _get_conversation_store() -> ConversationStore:
    global _conversation_store
    if _conversation_store is None:
        _conversation_store = ConversationStore()
    return _conversation_store
