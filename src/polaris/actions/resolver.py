"""
Path resolution - turn "a/b/c.txt" into the ID of folder "b".

Missing folders along the way are created. Within one apply pass every
(parent, segment) lookup is remembered in a ResolutionCache, so files that
share a prefix cost one query (and at most one create) per folder.
"""

from polaris.core.config import get_logger
from polaris.core.exceptions import ResolutionError
from polaris.storage.base import DocumentStore

logger = get_logger("actions.resolver")

ROOT: None = None
"""Parent value meaning "directly under the project root"."""


def split_path(path: str) -> tuple[list[str], str]:
    """
    Split a logical path into folder segments and the leaf name.

    Segments are returned as-is; "a//b" yields an empty middle segment,
    which the store will reject.
    """
    parts = path.split("/")
    leaf = parts.pop()
    return parts, leaf


class ResolutionCache:
    """Pass-local map of (parent ID, segment) to folder ID."""

    def __init__(self):
        self._entries: dict[tuple[str | None, str], str] = {}

    def get(self, parent_id: str | None, name: str) -> str | None:
        return self._entries.get((parent_id, name))

    def put(self, parent_id: str | None, name: str, folder_id: str) -> None:
        self._entries[(parent_id, name)] = folder_id

    def __contains__(self, key: tuple[str | None, str]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class PathResolver:
    """
    Resolves create paths to parent folder IDs for one project.

    Not safe to share across passes: the cache is never invalidated, so a
    folder deleted elsewhere after being cached would still be returned.
    """

    def __init__(
        self,
        store: DocumentStore,
        project_id: str,
        cache: ResolutionCache | None = None,
    ):
        self.store = store
        self.project_id = project_id
        self.cache = cache if cache is not None else ResolutionCache()

    def resolve_parent(self, path: str) -> str | None:
        """
        Get the folder the leaf of `path` belongs in, creating folders as needed.

        Args:
            path: Slash-separated path, e.g. "src/components/Button.tsx"

        Returns:
            Folder ID, or ROOT (None) when the path has no folder segments

        Raises:
            ResolutionError: If a lookup or create call to the store fails
        """
        folders, _ = split_path(path)
        if not folders:
            return ROOT

        current_parent: str | None = ROOT
        for segment in folders:
            cached = self.cache.get(current_parent, segment)
            if cached is not None:
                current_parent = cached
                continue

            try:
                folder_id = self._find_or_create(current_parent, segment)
            except Exception as e:
                raise ResolutionError(path, segment, e) from e

            self.cache.put(current_parent, segment, folder_id)
            current_parent = folder_id

        return current_parent

    def _find_or_create(self, parent_id: str | None, name: str) -> str:
        existing = self.store.find_folder_by_name(self.project_id, parent_id, name)
        if existing:
            return existing.id

        folder_id = self.store.create_folder(self.project_id, parent_id, name)
        logger.info(f"Created folder '{name}' under {parent_id or 'root'}")
        return folder_id
