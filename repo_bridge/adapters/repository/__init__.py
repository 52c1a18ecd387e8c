"""
Content repository adapter package.

Provides normalized interfaces for repository operations:
- models: native tree/file model and the tree query
- _client: UnifiedRepository protocol and its REST implementation
- file_service: safe folder creation with name validation
"""

from .models import (
    FilesTypeFilter,
    NativeRepositoryFile,
    NativeRepositoryFileTree,
    RepositoryRequest,
)
from ._client import (
    RepositoryAdapterError,
    RepositoryUnavailableError,
    UnifiedRepository,
    UnifiedRepositoryClient,
)
from .file_service import FileService, InvalidNameError, RepositoryFileService

__all__ = [
    "FilesTypeFilter",
    "NativeRepositoryFile",
    "NativeRepositoryFileTree",
    "RepositoryRequest",
    "RepositoryAdapterError",
    "RepositoryUnavailableError",
    "UnifiedRepository",
    "UnifiedRepositoryClient",
    "FileService",
    "InvalidNameError",
    "RepositoryFileService",
]
