"""
File Store - SQLite-backed project file trees.

Tracks:
- Projects
- Folders and files (one table, distinguished by type)

Each node points at its parent folder; a NULL parent means the project root.
Folder names are unique within a (project, parent) pair. The constraint lives
in a partial unique index so that two writers racing to create the same folder
end up sharing one row. File names carry no such constraint.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator
from uuid import uuid4

from polaris.core.config import settings, get_logger
from polaris.core.exceptions import InvalidNameError, NodeNotFoundError, StoreError
from polaris.core.types import FileNode, NodeType, Project

logger = get_logger("storage.files")


class FileStore:
    """
    SQLite store for projects and their file trees.

    Tables:
    - projects: Project metadata
    - files: Folder and file nodes
    """

    def __init__(self, db_path: Path | None = None):
        """Initialize the file store."""
        self.db_path = db_path or settings.files_db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS projects (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS files (
                    id TEXT PRIMARY KEY,
                    project_id TEXT NOT NULL,
                    parent_id TEXT,
                    name TEXT NOT NULL,
                    type TEXT NOT NULL,
                    content TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY (project_id) REFERENCES projects(id),
                    FOREIGN KEY (parent_id) REFERENCES files(id)
                )
            """)

            # Indexes
            conn.execute("CREATE INDEX IF NOT EXISTS idx_files_project ON files(project_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_files_parent ON files(project_id, parent_id)")
            conn.execute("""
                CREATE UNIQUE INDEX IF NOT EXISTS idx_files_unique_folder
                ON files(project_id, COALESCE(parent_id, ''), name)
                WHERE type = 'folder'
            """)

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

    # ============================================
    # Projects
    # ============================================

    def create_project(self, name: str, project_id: str | None = None) -> str:
        """
        Create a new project.

        Args:
            name: Display name
            project_id: Optional specific ID (generates UUID if not provided)

        Returns:
            Project ID
        """
        proj_id = project_id or str(uuid4())
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            conn.execute(
                "INSERT INTO projects (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (proj_id, name, now, now),
            )
            conn.commit()

        logger.debug(f"Created project: {proj_id}")
        return proj_id

    def get_project(self, project_id: str) -> Project | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM projects WHERE id = ?", (project_id,)
            ).fetchone()

            return Project(**dict(row)) if row else None

    def list_projects(self) -> list[Project]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM projects ORDER BY created_at ASC"
            ).fetchall()

            return [Project(**dict(row)) for row in rows]

    # ============================================
    # Nodes
    # ============================================

    def get_file(self, file_id: str) -> FileNode | None:
        """Get a folder or file by ID."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM files WHERE id = ?", (file_id,)
            ).fetchone()

            return FileNode(**dict(row)) if row else None

    def find_folder_by_name(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
    ) -> FileNode | None:
        """
        Find a folder by exact (case-sensitive) name under a parent.

        Args:
            project_id: Owning project
            parent_id: Parent folder ID (None = project root)
            name: Folder name

        Returns:
            The folder node or None
        """
        with self._get_connection() as conn:
            # IS matches NULL parents as well as concrete IDs
            row = conn.execute(
                """
                SELECT * FROM files
                WHERE project_id = ? AND parent_id IS ? AND name = ? AND type = ?
                """,
                (project_id, parent_id, name, NodeType.FOLDER.value),
            ).fetchone()

            return FileNode(**dict(row)) if row else None

    def create_folder(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
    ) -> str:
        """
        Create a folder.

        If a folder with the same name already exists under the parent (for
        example one created concurrently by another writer), its ID is
        returned instead of creating a duplicate.

        Returns:
            Folder ID
        """
        folder_id = self._insert_node(project_id, parent_id, name, NodeType.FOLDER, None)
        logger.debug(f"Created folder '{name}' ({folder_id}) in project {project_id}")
        return folder_id

    def create_file(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
        content: str,
    ) -> str:
        """
        Create a file.

        Returns:
            File ID
        """
        file_id = self._insert_node(project_id, parent_id, name, NodeType.FILE, content)
        logger.debug(f"Created file '{name}' ({file_id}) in project {project_id}")
        return file_id

    def update_file(self, file_id: str, content: str) -> bool:
        """
        Overwrite a file's content.

        Returns:
            True if a file was updated, False if the ID is unknown or a folder
        """
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            cursor = conn.execute(
                "UPDATE files SET content = ?, updated_at = ? WHERE id = ? AND type = ?",
                (content, now, file_id, NodeType.FILE.value),
            )
            conn.commit()

            updated = cursor.rowcount > 0
            if updated:
                logger.debug(f"Updated file {file_id}")

            return updated

    def list_project_files(self, project_id: str) -> list[FileNode]:
        """Get every folder and file in a project."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM files WHERE project_id = ? ORDER BY created_at ASC",
                (project_id,),
            ).fetchall()

            return [FileNode(**dict(row)) for row in rows]

    def get_file_path(self, file_id: str) -> str:
        """Get the slash-separated path of a node from the project root."""
        parts: list[str] = []
        current_id: str | None = file_id

        with self._get_connection() as conn:
            while current_id:
                row = conn.execute(
                    "SELECT name, parent_id FROM files WHERE id = ?", (current_id,)
                ).fetchone()
                if not row:
                    break
                parts.append(row["name"])
                current_id = row["parent_id"]

        return "/".join(reversed(parts))

    # ============================================
    # Helpers
    # ============================================

    def _insert_node(
        self,
        project_id: str,
        parent_id: str | None,
        name: str,
        node_type: NodeType,
        content: str | None,
    ) -> str:
        _validate_name(name)
        node_id = str(uuid4())
        now = datetime.now().isoformat()

        with self._get_connection() as conn:
            project = conn.execute(
                "SELECT id FROM projects WHERE id = ?", (project_id,)
            ).fetchone()
            if not project:
                raise NodeNotFoundError(f"Project not found: {project_id}")

            if parent_id is not None:
                parent = conn.execute(
                    "SELECT type FROM files WHERE id = ? AND project_id = ?",
                    (parent_id, project_id),
                ).fetchone()
                if not parent or parent["type"] != NodeType.FOLDER.value:
                    raise NodeNotFoundError(f"Parent folder not found: {parent_id}")

            try:
                conn.execute(
                    """
                    INSERT INTO files (id, project_id, parent_id, name, type, content, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (node_id, project_id, parent_id, name, node_type.value, content, now, now),
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                if node_type != NodeType.FOLDER:
                    raise StoreError(f"Failed to create file '{name}': {e}") from e
                conn.rollback()

                existing = conn.execute(
                    """
                    SELECT id FROM files
                    WHERE project_id = ? AND parent_id IS ? AND name = ? AND type = ?
                    """,
                    (project_id, parent_id, name, NodeType.FOLDER.value),
                ).fetchone()
                if not existing:
                    raise StoreError(f"Failed to create folder '{name}': {e}") from e

                logger.info(f"Folder '{name}' already exists, reusing {existing['id']}")
                return existing["id"]

        return node_id


def _validate_name(name: str) -> None:
    """Reject names that cannot be a single path segment."""
    if not name or not name.strip():
        raise InvalidNameError(f"Invalid node name: {name!r}")
    if "/" in name:
        raise InvalidNameError(f"Node name must not contain '/': {name!r}")
