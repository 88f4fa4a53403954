"""
Tools - File listing.

Gives a model (or a person) a flat view of a project's tree:
- list_files: every folder and file with its ID, type and parent
"""

import json

from polaris.core.types import NodeType
from polaris.storage.base import DocumentStore
from polaris.tools.base import _get_file_store, logger


def list_files(project_id: str, store: DocumentStore | None = None) -> str:
    """
    List all files and folders in a project.

    Items with parentId null are at the root. Items sharing a parentId are in
    the same folder.

    Args:
        project_id: Project to list
        store: Store to read from (defaults to the shared FileStore)

    Returns:
        JSON array of {id, name, type, parentId}, folders first then by
        name, or an "Error listing files: ..." string on failure
    """
    store = store or _get_file_store()

    try:
        nodes = store.list_project_files(project_id)
    except Exception as e:
        logger.error(f"Failed to list files for project {project_id}: {e}")
        return f"Error listing files: {e}"

    ordered = sorted(nodes, key=lambda n: (n.type != NodeType.FOLDER, n.name.lower(), n.name))

    return json.dumps([
        {
            "id": n.id,
            "name": n.name,
            "type": n.type,
            "parentId": n.parent_id,
        }
        for n in ordered
    ])


__all__ = [
    "list_files",
]
