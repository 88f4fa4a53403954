"""
Conversation Store - SQLite-backed conversation persistence.

Tracks:
- Conversations (one per chat thread, attached to a project)
- Messages (user prompts and assistant responses)

The message workflow reads recent messages for prompt context, sets the
conversation title once, and writes the assistant response into the
placeholder message created when the user sent theirs.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator
from uuid import uuid4

from polaris.core.config import settings, get_logger
from polaris.core.types import Conversation, Message, MessageRole, MessageStatus

logger = get_logger("storage.conversations")


class ConversationStore:
    """
    SQLite store for conversations and their messages.

    Tables:
    - conversations: Metadata about conversations
    - messages: Individual messages in conversations
    """

    def __init__(self, db_path: Path | None = None):
        """Initialize the conversation store."""
        self.db_path = db_path or settings.conversations_db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS conversations (
                    id TEXT PRIMARY KEY,
                    project_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS messages (
                    id TEXT PRIMARY KEY,
                    conversation_id TEXT NOT NULL,
                    role TEXT NOT NULL,
                    content TEXT NOT NULL,
                    status TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY (conversation_id) REFERENCES conversations(id)
                )
            """)

            # Indexes
            conn.execute("CREATE INDEX IF NOT EXISTS idx_conversations_project ON conversations(project_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_conversation ON messages(conversation_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_created ON messages(created_at)")

            conn.commit()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def create_conversation(
        self,
        project_id: str,
        title: str | None = None,
        conversation_id: str | None = None,
    ) -> str:
        """
        Create a new conversation.

        Args:
            project_id: Project the conversation belongs to
            title: Initial title (defaults to the configured placeholder title)
            conversation_id: Optional specific conversation ID

        Returns:
            Conversation ID
        """
        conv_id = conversation_id or str(uuid4())
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO conversations (id, project_id, title, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (conv_id, project_id, title or settings.default_conversation_title, now, now),
            )
            conn.commit()

        logger.debug(f"Created conversation: {conv_id}")
        return conv_id

    def get_conversation(self, conv_id: str) -> Conversation | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM conversations WHERE id = ?",
                (conv_id,),
            ).fetchone()

            return Conversation(**dict(row)) if row else None

    def update_conversation_title(self, conv_id: str, title: str) -> bool:
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE conversations SET title = ?, updated_at = ? WHERE id = ?",
                (title, now, conv_id),
            )
            conn.commit()

            return cursor.rowcount > 0

    def add_message(
        self,
        conv_id: str,
        role: MessageRole | str,
        content: str = "",
        status: MessageStatus | str = MessageStatus.COMPLETED,
    ) -> str:
        """
        Add a message to a conversation.

        Args:
            conv_id: Conversation ID
            role: "user" or "assistant"
            content: Message content
            status: "processing" for an assistant placeholder

        Returns:
            Message ID
        """
        msg_id = str(uuid4())
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO messages (id, conversation_id, role, content, status, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (msg_id, conv_id, MessageRole(role).value, content, MessageStatus(status).value, now, now),
            )

            # Update conversation timestamp
            conn.execute(
                "UPDATE conversations SET updated_at = ? WHERE id = ?",
                (now, conv_id),
            )

            conn.commit()

        logger.debug(f"Added message to conversation {conv_id}")
        return msg_id

    def get_message(self, msg_id: str) -> Message | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM messages WHERE id = ?",
                (msg_id,),
            ).fetchone()

            return Message(**dict(row)) if row else None

    def get_recent_messages(self, conv_id: str, limit: int = 10) -> list[Message]:
        """
        Get the most recent messages of a conversation.

        Returns:
            Up to `limit` messages, oldest first
        """
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM messages
                WHERE conversation_id = ?
                ORDER BY created_at DESC, rowid DESC
                LIMIT ?
                """,
                (conv_id, limit),
            ).fetchall()

            messages = [Message(**dict(row)) for row in rows]

            # Return in chronological order
            messages.reverse()
            return messages

    def update_message_content(self, msg_id: str, content: str) -> bool:
        """Set a message's content and mark it completed."""
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE messages SET content = ?, status = ?, updated_at = ? WHERE id = ?",
                (content, MessageStatus.COMPLETED.value, now, msg_id),
            )
            conn.commit()

            updated = cursor.rowcount > 0
            if updated:
                logger.debug(f"Updated message {msg_id}")

            return updated

    def set_message_status(self, msg_id: str, status: MessageStatus | str) -> bool:
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE messages SET status = ?, updated_at = ? WHERE id = ?",
                (MessageStatus(status).value, now, msg_id),
            )
            conn.commit()

            return cursor.rowcount > 0
