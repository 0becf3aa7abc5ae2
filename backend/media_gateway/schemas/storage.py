from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UploadedObject(BaseModel):
    key: str = Field(..., min_length=1)
    content_type: str = Field(default="application/octet-stream")
    data: bytes


class StoredObject(BaseModel):
    key: str
    size: int = 0
    last_modified: datetime | None = None


class ObjectPage(BaseModel):
    objects: list[StoredObject] = Field(default_factory=list)
    is_truncated: bool = False


class StreamedObject(BaseModel):
    """An object fetched from the store whose body has not been read yet."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str
    content_type: str | None = None
    content_length: int
    content_range: str | None = None
    body: Any


class FileRef(BaseModel):
    name: str
    key: str


class UploadResponse(BaseModel):
    message: str
    file: FileRef


class FileListItem(FileRef):
    url: str = ""


class FileListResponse(BaseModel):
    files: list[FileListItem]
