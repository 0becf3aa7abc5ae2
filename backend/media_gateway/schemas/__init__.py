from media_gateway.schemas.storage import (
    FileListItem,
    FileListResponse,
    FileRef,
    ObjectPage,
    StoredObject,
    StreamedObject,
    UploadedObject,
    UploadResponse,
)

__all__ = [
    "UploadedObject",
    "StoredObject",
    "ObjectPage",
    "StreamedObject",
    "FileRef",
    "FileListItem",
    "FileListResponse",
    "UploadResponse",
]
