"""
Native repository model.

Mirrors the JSON the repository REST API returns for files and trees. The
API is loose with types (booleans as "true", timestamps as epoch millis in
strings), so parsing relies on pydantic's lax coercion.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FilesTypeFilter(str, Enum):
    FILES = "FILES"
    FOLDERS = "FOLDERS"
    FILES_FOLDERS = "FILES_FOLDERS"


class NativeRepositoryFile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: Union[str, int]
    path: str
    name: str
    folder: bool = False
    hidden: bool = False
    last_modified_date: Optional[datetime] = None
    created_date: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None


class NativeRepositoryFileTree(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file: NativeRepositoryFile
    children: Optional[List["NativeRepositoryFileTree"]] = None


class RepositoryRequest(BaseModel):
    """Tree query sent to the backing store."""
    path: str = "/"
    depth: Optional[int] = None
    include_acls: bool = False
    child_node_filter: str = "*"
    include_system_folders: bool = False
    show_hidden: bool = False
    types: FilesTypeFilter = FilesTypeFilter.FILES_FOLDERS

    def to_query_params(self) -> dict:
        params = {
            "showHidden": str(self.show_hidden).lower(),
            "filter": f"{self.child_node_filter}|{self.types.value}",
            "includeAcls": str(self.include_acls).lower(),
            "includeSysDirs": str(self.include_system_folders).lower(),
        }
        if self.depth is not None:
            params["depth"] = self.depth
        return params
