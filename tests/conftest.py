from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
import pytest

from repo_bridge.adapters.repository import (
    NativeRepositoryFile,
    NativeRepositoryFileTree,
    RepositoryRequest,
)


CONTEXT_URL = "http://bi.example.com/pentaho/"


def native_folder(path, name, id, hidden=False, modified=None, created=None, title=None):
    return NativeRepositoryFile(
        id=id,
        path=path,
        name=name,
        folder=True,
        hidden=hidden,
        last_modified_date=modified,
        created_date=created,
        title=title,
    )


def sample_tree() -> NativeRepositoryFileTree:
    """
    /
      public
        Sales (hidden)
      home
        admin
    """
    created = datetime(2023, 1, 2, tzinfo=timezone.utc)
    modified = datetime(2023, 6, 7, tzinfo=timezone.utc)
    return NativeRepositoryFileTree(
        file=native_folder("/", "", "root-id", created=created),
        children=[
            NativeRepositoryFileTree(
                file=native_folder("/public", "public", 101, modified=modified, created=created, title="Public"),
                children=[
                    NativeRepositoryFileTree(
                        file=native_folder("/public/Sales", "Sales", 102, hidden=True, created=created),
                    ),
                ],
            ),
            NativeRepositoryFileTree(
                file=native_folder("/home", "home", 201, created=created),
                children=[
                    NativeRepositoryFileTree(
                        file=native_folder("/home/admin", "admin", 202, created=created),
                        children=[],
                    ),
                ],
            ),
        ],
    )


class InMemoryRepository:
    """UnifiedRepository fake that records the tree queries it receives."""

    def __init__(self, tree: Optional[NativeRepositoryFileTree] = None):
        self.tree = tree or sample_tree()
        self.tree_requests: List[RepositoryRequest] = []
        self.created: List[str] = []
        self.files: Dict[str, NativeRepositoryFile] = {}
        for node in self._walk(self.tree):
            self.files[node.file.path] = node.file

    def _walk(self, node):
        yield node
        for child in node.children or []:
            yield from self._walk(child)

    async def get_tree(self, request):
        self.tree_requests.append(request)
        return self.tree

    async def get_file(self, path):
        return self.files.get(path)

    async def create_folder(self, path):
        self.created.append(path)
        self.files[path] = native_folder(path, path.rsplit("/", 1)[-1], f"new-{len(self.created)}")
        return True


class FakePlatform:
    """
    Scripted platform HTTP endpoints for httpx.MockTransport.

    Answers are matched on method plus the end of the decoded URL path; an
    unmatched request gets a 404.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes = []

    def on(self, method: str, path_suffix: str, status: int = 200, text: str = "", error: Exception = None):
        self._routes.append((method, path_suffix, status, text, error))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, suffix, status, text, error in self._routes:
            if request.method == method and request.url.path.endswith(suffix):
                if error is not None:
                    raise error
                return httpx.Response(status, text=text)
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def platform():
    return FakePlatform()
