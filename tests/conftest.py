"""
Pytest configuration and fixtures for Polaris tests.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from uuid import uuid4

import pytest

# Set test environment before importing app modules
os.environ["POLARIS_DATA_DIR"] = tempfile.mkdtemp()
os.environ["POLARIS_DB_SYNC_DELAY_SECONDS"] = "0"

from polaris.core.config import settings  # noqa: E402
from polaris.core.exceptions import StoreError  # noqa: E402
from polaris.core.types import FileNode, NodeType  # noqa: E402
from polaris.storage.conversations import ConversationStore  # noqa: E402
from polaris.storage.files import FileStore  # noqa: E402


class RecordingStore:
    """
    In-memory DocumentStore that records every call.

    Failures can be injected per name (folders and files) or per file ID
    (updates) to exercise per-action isolation.
    """

    def __init__(self):
        self.nodes: dict[str, FileNode] = {}
        self.calls: list[tuple] = []
        self.fail_find: set[str] = set()
        self.fail_create_folder: set[str] = set()
        self.fail_create_file: set[str] = set()
        self.fail_update: set[str] = set()

    def calls_to(self, operation: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == operation]

    def find_folder_by_name(self, project_id, parent_id, name):
        self.calls.append(("find_folder_by_name", project_id, parent_id, name))
        if name in self.fail_find:
            raise StoreError(f"lookup failed for {name}")
        for node in self.nodes.values():
            if (
                node.project_id == project_id
                and node.parent_id == parent_id
                and node.name == name
                and node.is_folder
            ):
                return node
        return None

    def create_folder(self, project_id, parent_id, name):
        self.calls.append(("create_folder", project_id, parent_id, name))
        if name in self.fail_create_folder:
            raise StoreError(f"create folder failed for {name}")
        return self._add(project_id, parent_id, name, NodeType.FOLDER, None)

    def create_file(self, project_id, parent_id, name, content):
        self.calls.append(("create_file", project_id, parent_id, name, content))
        if name in self.fail_create_file:
            raise StoreError(f"create file failed for {name}")
        return self._add(project_id, parent_id, name, NodeType.FILE, content)

    def update_file(self, file_id, content):
        self.calls.append(("update_file", file_id, content))
        if file_id in self.fail_update:
            raise StoreError(f"update failed for {file_id}")
        node = self.nodes.get(file_id)
        if node is None or node.is_folder:
            return False
        node.content = content
        return True

    def list_project_files(self, project_id):
        self.calls.append(("list_project_files", project_id))
        return [n for n in self.nodes.values() if n.project_id == project_id]

    def folders(self) -> list[FileNode]:
        return [n for n in self.nodes.values() if n.is_folder]

    def files(self) -> list[FileNode]:
        return [n for n in self.nodes.values() if not n.is_folder]

    def _add(self, project_id, parent_id, name, node_type, content) -> str:
        node_id = str(uuid4())
        self.nodes[node_id] = FileNode(
            id=node_id,
            project_id=project_id,
            parent_id=parent_id,
            name=name,
            type=node_type,
            content=content,
        )
        return node_id


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def file_store(temp_data_dir) -> FileStore:
    return FileStore(temp_data_dir / "files.db")


@pytest.fixture
def conversation_store(temp_data_dir) -> ConversationStore:
    return ConversationStore(temp_data_dir / "conversations.db")


@pytest.fixture
def project_id(file_store) -> str:
    return file_store.create_project("Demo")


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def internal_key(monkeypatch) -> str:
    """Configure the workflow credential for the duration of a test."""
    monkeypatch.setattr(settings, "internal_key", "test-internal-key")
    return "test-internal-key"


@pytest.fixture
def fake_llm():
    """
    Factory for fake text generators.

    Title prompts get `title`; everything else gets `response`. Every call is
    recorded as (prompt, system_prompt).
    """
    from polaris.core.prompts import TITLE_GENERATOR_SYSTEM_PROMPT

    def _factory(response: str = "", title: str = "Generated Title"):
        calls: list[tuple[str, str | None]] = []

        async def generate(prompt: str, system_prompt: str | None = None, **kwargs) -> str:
            calls.append((prompt, system_prompt))
            if system_prompt == TITLE_GENERATOR_SYSTEM_PROMPT:
                return title
            return response

        generate.calls = calls
        return generate

    return _factory
