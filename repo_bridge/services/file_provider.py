"""
Repository file provider.

Presents the content repository to the generic file browser: converts the
native folder tree into RepositoryFileTree nodes and keeps the result cached
until a folder is created or the cache is cleared explicitly.
"""
import asyncio
import logging
from typing import Optional

from ..adapters.repository import (
    FilesTypeFilter,
    FileService,
    InvalidNameError,
    NativeRepositoryFile,
    NativeRepositoryFileTree,
    RepositoryFileService,
    RepositoryRequest,
    UnifiedRepository,
)
from ..messages import get_string
from ..models import (
    PROVIDER_TYPE,
    RepositoryFile,
    RepositoryFileTree,
    RepositoryFolder,
    RepositoryObject,
)


log = logging.getLogger("repo_bridge.file_provider")

REPOSITORY_PREFIX = "/"


def _display_name() -> str:
    return get_string("GenericFileRepository.REPOSITORY_FOLDER_DISPLAY")


class RepositoryFileProvider:
    """
    Generic file provider backed by the content repository.

    Args:
        repository: Backing store handle
        file_service: Folder creation service (defaults to one over ``repository``)
    """

    type = PROVIDER_TYPE
    file_class = RepositoryFile

    def __init__(self, repository: Optional[UnifiedRepository], file_service: Optional[FileService] = None):
        self.repository = repository
        if file_service is None and repository is not None:
            file_service = RepositoryFileService(repository)
        self.file_service = file_service
        self._tree: Optional[RepositoryFileTree] = None
        self._tree_lock = asyncio.Lock()
        # bumped on every invalidation; a query that overlaps one is not cached
        self._generation = 0

    @property
    def name(self) -> str:
        return _display_name()

    @property
    def is_available(self) -> bool:
        return self.repository is not None

    async def add(self, path: str) -> bool:
        """Create a folder; False if the name is invalid or nothing was created."""
        try:
            success = await self.file_service.create_dir_safe(path)
        except InvalidNameError as e:
            log.info("Rejected folder %s: %s", path, e)
            return False

        if success:
            self.clear_cache()
        return success

    async def get_folders(self, depth: Optional[int] = None) -> RepositoryFileTree:
        """
        Folder tree of the whole repository, from cache when possible.

        Raises:
            RepositoryAdapterError: If the backing store query fails
        """
        async with self._tree_lock:
            if self._tree is not None:
                return self._tree

            generation = self._generation

            request = RepositoryRequest(
                path="/",
                depth=depth,
                include_acls=False,
                child_node_filter="*",
                include_system_folders=False,
                types=FilesTypeFilter.FOLDERS,
                show_hidden=True,
            )
            native_tree = await self.repository.get_tree(request)

            tree = self._convert_to_tree_node(native_tree, None)

            root = tree.file
            root.name = _display_name()
            root.can_add_children = False
            root.can_delete = False
            root.can_edit = False

            if generation == self._generation:
                self._tree = tree
                log.info("Repository folder tree cached (depth=%s)", depth)
            return tree

    def clear_cache(self) -> None:
        self._generation += 1
        self._tree = None
        log.debug("Repository folder tree cache cleared")

    async def validate(self, path: str) -> bool:
        return await self.repository.get_file(path) is not None

    def owns(self, path: str) -> bool:
        return path.startswith(REPOSITORY_PREFIX)

    def _convert(
        self,
        native_file: NativeRepositoryFile,
        parent_folder: Optional[RepositoryFolder],
    ) -> RepositoryObject:
        cls = RepositoryFolder if native_file.folder else RepositoryFile
        return cls(
            path=native_file.path,
            name=native_file.name,
            parent=parent_folder.path if parent_folder is not None else None,
            hidden=native_file.hidden,
            modified_date=native_file.last_modified_date or native_file.created_date,
            object_id=str(native_file.id),
            root=_display_name(),
            can_edit=True,
            title=native_file.title,
            description=native_file.description,
        )

    def _convert_to_tree_node(
        self,
        native_tree: NativeRepositoryFileTree,
        parent_folder: Optional[RepositoryFolder],
    ) -> RepositoryFileTree:
        node = self._convert(native_tree.file, parent_folder)
        tree = RepositoryFileTree(file=node)
        for native_child in native_tree.children or []:
            tree.add_child(self._convert_to_tree_node(native_child, node))
        return tree
