"""
Document store protocol.

The action engine only depends on these operations, so any backend (the
SQLite FileStore, a remote API client, an in-memory fake) can be passed in.
"""

from typing import Protocol

from polaris.core.types import FileNode


class DocumentStore(Protocol):
    """Operations the action engine needs from a project file tree."""

    def find_folder_by_name(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
    ) -> FileNode | None:
        """Return the folder named `name` directly under `parent_id`, if any."""
        ...

    def create_folder(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
    ) -> str:
        """Create a folder and return its identifier."""
        ...

    def create_file(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
        content: str,
    ) -> str:
        """Create a file and return its identifier."""
        ...

    def update_file(self, file_id: str, content: str) -> bool:
        """Overwrite a file's content. False if no such file exists."""
        ...

    def list_project_files(self, project_id: str) -> list[FileNode]:
        """Return every folder and file in the project."""
        ...
