"""
Folder creation with name validation.

The repository rejects a handful of characters in file names; checking them
here gives callers a specific InvalidNameError instead of an opaque failure
from the store.
"""

from typing import Protocol

from ._client import UnifiedRepository


RESERVED_CHARS = ("/", "\\", "\t", "\r", "\n")
RESERVED_NAMES = (".", "..")


class InvalidNameError(ValueError):
    """Raised when a path segment is not a valid repository name."""
    pass


class FileService(Protocol):
    async def create_dir_safe(self, path: str) -> bool: ...


def is_valid_name(name: str) -> bool:
    if not name or not name.strip():
        return False
    if name in RESERVED_NAMES:
        return False
    return not any(ch in name for ch in RESERVED_CHARS)


class RepositoryFileService:
    def __init__(self, repository: UnifiedRepository):
        self.repository = repository

    async def create_dir_safe(self, path: str) -> bool:
        """
        Create the folder at ``path`` after validating every segment.

        Returns:
            True if the folder was created, False if it already exists or the
            store declined.

        Raises:
            InvalidNameError: If any segment of ``path`` is not a valid name
        """
        if not path or not path.startswith("/"):
            raise InvalidNameError(f"Not an absolute repository path: {path!r}")

        for segment in path.strip("/").split("/"):
            if not is_valid_name(segment):
                raise InvalidNameError(f"Invalid folder name: {segment!r}")

        if await self.repository.get_file(path) is not None:
            return False

        return await self.repository.create_folder(path)
