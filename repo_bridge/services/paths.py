"""
Repository path helpers.

The platform REST API addresses files by an encoded path in a single URL
segment: ``:`` is first escaped to a tab, then ``/`` becomes ``:``. The
result is percent-encoded before it goes into a URL.
"""

from typing import Optional
from urllib.parse import quote


PATH_SEPARATOR = "/"


def encode_repository_path(path: str) -> str:
    return path.replace(":", "\t").replace("/", ":")


def decode_repository_path(encoded: str) -> str:
    return encoded.replace(":", "/").replace("\t", ":")


def url_encode(value: str) -> str:
    return quote(value, safe="")


def encode_path_segment(path: str) -> str:
    """Repository-encode and percent-encode ``path`` for use in a URL."""
    return url_encode(encode_repository_path(path))


def get_parent_path(path: Optional[str]) -> Optional[str]:
    """
    Parent of a repository path.

    "/a/b" -> "/a", "/a" -> "/", and the root, empty strings or None have no
    parent. A trailing separator is ignored.
    """
    if not path:
        return None

    if len(path) > 1 and path.endswith(PATH_SEPARATOR):
        path = path.rstrip(PATH_SEPARATOR) or PATH_SEPARATOR

    if path == PATH_SEPARATOR:
        return None

    index = path.rfind(PATH_SEPARATOR)
    if index < 0:
        return None
    if index == 0:
        return PATH_SEPARATOR
    return path[:index]
