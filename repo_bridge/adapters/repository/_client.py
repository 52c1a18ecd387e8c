"""
Content repository REST client.

Implements the UnifiedRepository protocol against the platform's repository
REST API. Transport failures and server errors surface as
RepositoryUnavailableError so callers can tell "store down" apart from a
genuinely missing file.
"""

import logging
from typing import Optional, Protocol

import httpx

from ...services.environment import NO_CACHE_HEADERS, get_fully_qualified_url, open_client
from ...services.paths import encode_path_segment
from .models import NativeRepositoryFile, NativeRepositoryFileTree, RepositoryRequest


log = logging.getLogger("repo_bridge.adapters.repository")


class RepositoryAdapterError(Exception):
    """Base exception for repository adapter errors."""
    pass


class RepositoryUnavailableError(RepositoryAdapterError):
    """Raised when the backing store cannot be reached or fails server-side."""
    pass


class UnifiedRepository(Protocol):
    """What the file provider needs from the backing store."""

    async def get_tree(self, request: RepositoryRequest) -> NativeRepositoryFileTree: ...

    async def get_file(self, path: str) -> Optional[NativeRepositoryFile]: ...

    async def create_folder(self, path: str) -> bool: ...


class UnifiedRepositoryClient:
    """
    Repository access over HTTP.

    Args:
        context_url: Deployment context root (defaults to CONTEXT_URL)
        client: Optional shared AsyncClient; a short-lived one is used otherwise
    """

    def __init__(self, context_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = get_fully_qualified_url(context_url)
        self._client = client

    def _files_url(self, path: str, action: str) -> str:
        return f"{self.base_url}api/repo/files/{encode_path_segment(path)}/{action}"

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = {**NO_CACHE_HEADERS, **kwargs.pop("headers", {})}
        async with open_client(self._client) as client:
            try:
                response = await client.request(method, url, headers=headers, **kwargs)
            except httpx.RequestError as e:
                log.warning("Repository request %s %s failed: %s", method, url, e)
                raise RepositoryUnavailableError(f"Failed to reach repository: {e}")

        if response.status_code >= 500:
            raise RepositoryUnavailableError(
                f"Repository error: {response.status_code} - {response.text}"
            )
        return response

    async def get_tree(self, request: RepositoryRequest) -> NativeRepositoryFileTree:
        """
        Fetch the folder/file tree described by ``request``.

        Raises:
            RepositoryUnavailableError: store unreachable or 5xx
            RepositoryAdapterError: any other non-200 answer or a malformed body
        """
        response = await self._send(
            "GET",
            self._files_url(request.path, "tree"),
            params=request.to_query_params(),
            headers={"Accept": "application/json"},
        )
        if response.status_code != 200:
            raise RepositoryAdapterError(f"Tree request failed: {response.status_code}")

        try:
            return NativeRepositoryFileTree.model_validate(response.json())
        except ValueError as e:
            raise RepositoryAdapterError(f"Malformed tree response: {e}")

    async def get_file(self, path: str) -> Optional[NativeRepositoryFile]:
        """Return the file at ``path`` or None when it does not exist."""
        response = await self._send(
            "GET",
            self._files_url(path, "properties"),
            headers={"Accept": "application/json"},
        )
        if response.status_code in (204, 404):
            return None
        if response.status_code != 200:
            raise RepositoryAdapterError(f"File lookup failed for {path}: {response.status_code}")

        try:
            return NativeRepositoryFile.model_validate(response.json())
        except ValueError as e:
            raise RepositoryAdapterError(f"Malformed file response for {path}: {e}")

    async def create_folder(self, path: str) -> bool:
        """Create ``path``; False when the repository reports a conflict."""
        response = await self._send(
            "PUT",
            f"{self.base_url}api/repo/dirs/{encode_path_segment(path)}",
        )
        if response.status_code == 200:
            log.info("Created repository folder %s", path)
            return True
        if response.status_code == 409:
            return False
        raise RepositoryAdapterError(f"Folder creation failed for {path}: {response.status_code}")
