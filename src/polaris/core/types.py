"""
Core type definitions for Polaris.

Persistent records (owned by the stores):
- Project, FileNode (folder or file), Conversation, Message

Transient records (produced and consumed within one pass):
- CreateFileAction, UpdateFileAction, ParsedActions
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


# ============================================
# Enums
# ============================================

class NodeType(str, Enum):
    """Kinds of nodes in a project's file tree."""
    FOLDER = "folder"
    FILE = "file"


class MessageRole(str, Enum):
    """Author of a conversation message."""
    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(str, Enum):
    """Lifecycle of an assistant message."""
    PROCESSING = "processing"  # Placeholder while the workflow runs
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ============================================
# Persistent Records
# ============================================

class Project(BaseModel):
    """A workspace that owns a file tree and conversations."""

    id: str
    name: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class FileNode(BaseModel):
    """A persisted file or folder in a project's tree."""

    id: str
    """Store-assigned identifier."""

    project_id: str

    parent_id: str | None = None
    """Containing folder. None means the project root."""

    name: str
    """Single path segment."""

    type: NodeType

    content: str | None = None
    """File body. Always None for folders."""

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        use_enum_values = True

    @property
    def is_folder(self) -> bool:
        return self.type == NodeType.FOLDER


class Conversation(BaseModel):
    """A chat thread attached to a project."""

    id: str
    project_id: str
    title: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class Message(BaseModel):
    """A single chat message."""

    id: str
    conversation_id: str
    role: MessageRole
    content: str = ""
    status: MessageStatus = MessageStatus.COMPLETED
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        use_enum_values = True


# ============================================
# Actions
# ============================================

class CreateFileAction(BaseModel):
    """Create a file at a slash-separated path, making folders as needed."""

    kind: Literal["create_file"] = "create_file"
    path: str
    content: str = ""


class UpdateFileAction(BaseModel):
    """Overwrite the content of an existing file."""

    kind: Literal["update_file"] = "update_file"
    file_id: str
    content: str = ""


Action = CreateFileAction | UpdateFileAction


class ParsedActions(BaseModel):
    """Actions extracted from one model response, each list in source order."""

    creates: list[CreateFileAction] = Field(default_factory=list)
    updates: list[UpdateFileAction] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.creates) + len(self.updates)

    @property
    def is_empty(self) -> bool:
        return not self.creates and not self.updates


# ============================================
# Workflow Input
# ============================================

class MessageEvent(BaseModel):
    """Payload of a "message sent" event."""

    message_id: str
    """The assistant placeholder message the response is written to."""

    conversation_id: str
    project_id: str
    message: str
    """The user's chat message."""
