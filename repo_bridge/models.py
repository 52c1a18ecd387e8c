"""
Generic file provider model and the run-in-background schedule request.

All models serialize with camelCase keys, which is what the web UI expects.
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


PROVIDER_TYPE = "repository"


class RepositoryObject(BaseModel):
    """Common fields of every node handed to the generic file browser."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    path: Optional[str] = None
    name: Optional[str] = None
    parent: Optional[str] = Field(None, alias="parentPath")
    hidden: bool = False
    modified_date: Optional[datetime] = None
    object_id: Optional[str] = None
    root: Optional[str] = None
    can_edit: bool = False
    can_delete: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    provider: str = PROVIDER_TYPE


class RepositoryFolder(RepositoryObject):
    type: Literal["folder"] = "folder"
    can_add_children: bool = True


class RepositoryFile(RepositoryObject):
    type: Literal["file"] = "file"


class RepositoryFileTree(BaseModel):
    """A node plus its ordered children, mirroring the repository tree."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file: Union[RepositoryFolder, RepositoryFile] = Field(..., discriminator="type")
    children: List["RepositoryFileTree"] = Field(default_factory=list)

    def add_child(self, child: "RepositoryFileTree") -> None:
        self.children.append(child)


class ScheduleRequest(BaseModel):
    """Body of the background job submission.

    Unset optional fields go over the wire as JSON null. Extra keys are kept so
    a parameter collector can attach e.g. ``jobParameters``.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    input_file: str
    append_date_format: Optional[str] = None
    overwrite_file: Optional[str] = None
    job_name: Optional[str] = None
    output_file: Optional[str] = None
    run_in_background: bool = True

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
