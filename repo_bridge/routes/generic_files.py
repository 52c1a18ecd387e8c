"""
Generic File Routes

Exposes the repository file provider to the file browser: the folder tree,
folder creation and the folder existence check used by the scheduler UI.
Paths arrive repository-encoded in a single segment (":" for "/").
"""

import os

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from ..adapters.repository import RepositoryAdapterError, RepositoryUnavailableError
from ..models import RepositoryFileTree
from ..services.file_provider import RepositoryFileProvider
from ..services.paths import decode_repository_path


TREE_DEFAULT_DEPTH = int(os.getenv("TREE_DEFAULT_DEPTH", "-1"))


router = APIRouter(prefix="/api/generic-files", tags=["Generic Files"])


def get_file_provider(request: Request) -> RepositoryFileProvider:
    """Provider created at startup; 503 if the repository is not configured."""
    provider = getattr(request.app.state, "file_provider", None)
    if provider is None or not provider.is_available:
        raise HTTPException(status_code=503, detail="Repository provider not available")
    return provider


def _owned_path(provider: RepositoryFileProvider, encoded_path: str) -> str:
    path = decode_repository_path(encoded_path)
    if not provider.owns(path):
        raise HTTPException(status_code=404, detail=f"Path not handled by {provider.type}: {path}")
    return path


def _adapter_error(e: RepositoryAdapterError) -> HTTPException:
    if isinstance(e, RepositoryUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


@router.get("/tree", response_model=RepositoryFileTree)
async def get_folder_tree(
    depth: int = Query(TREE_DEFAULT_DEPTH, description="Tree depth, -1 for unlimited"),
    provider: RepositoryFileProvider = Depends(get_file_provider),
):
    """
    Folder tree of the repository.

    Served from the provider's cache until a folder is created or the cache
    is cleared.
    """
    try:
        return await provider.get_folders(depth)
    except RepositoryAdapterError as e:
        raise _adapter_error(e)


@router.put("/folders/{encoded_path}", status_code=201)
async def create_folder(
    encoded_path: str,
    provider: RepositoryFileProvider = Depends(get_file_provider),
):
    path = _owned_path(provider, encoded_path)
    try:
        created = await provider.add(path)
    except RepositoryAdapterError as e:
        raise _adapter_error(e)

    if not created:
        raise HTTPException(status_code=400, detail=f"Folder not created: {path}")
    return {"path": path, "created": True}


@router.head("/folders/{encoded_path}")
async def folder_exists(
    encoded_path: str,
    provider: RepositoryFileProvider = Depends(get_file_provider),
):
    """204 when the folder exists, 404 otherwise."""
    path = _owned_path(provider, encoded_path)
    try:
        exists = await provider.validate(path)
    except RepositoryAdapterError as e:
        raise _adapter_error(e)

    if not exists:
        raise HTTPException(status_code=404, detail=f"Folder not found: {path}")
    return Response(status_code=204)


@router.post("/cache/clear", status_code=204)
def clear_cache(provider: RepositoryFileProvider = Depends(get_file_provider)):
    provider.clear_cache()
    return Response(status_code=204)
