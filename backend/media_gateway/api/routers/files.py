import logging
from pathlib import PurePosixPath

from fastapi import APIRouter, Depends, File, Header, Query, UploadFile, status
from fastapi.responses import StreamingResponse

from media_gateway.api.deps import get_storage
from media_gateway.core.errors import (
    ListFailed,
    MissingFile,
    MissingKey,
    StreamFailed,
    UploadFailed,
)
from media_gateway.schemas import (
    FileListItem,
    FileListResponse,
    FileRef,
    UploadedObject,
    UploadResponse,
)
from media_gateway.services.storage import StorageError, StorageService, object_key_for

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])

DEFAULT_STREAM_CONTENT_TYPE = "video/mp4"


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    video: UploadFile | None = File(default=None),
    storage: StorageService = Depends(get_storage),
) -> UploadResponse:
    if video is None or not video.filename:
        raise MissingFile()

    key = object_key_for(video.filename)
    if not key:
        logger.warning("Rejected upload with unusable filename %r", video.filename)
        raise MissingFile()

    data = await video.read()
    try:
        await storage.put_object(
            UploadedObject(
                key=key,
                content_type=video.content_type or "application/octet-stream",
                data=data,
            )
        )
    except StorageError as exc:
        raise UploadFailed(str(exc)) from exc

    return UploadResponse(
        message="File uploaded successfully",
        file=FileRef(name=video.filename, key=key),
    )


@router.get("/files", response_model=FileListResponse)
async def list_files(storage: StorageService = Depends(get_storage)) -> FileListResponse:
    try:
        page = await storage.list_objects()
    except StorageError as exc:
        raise ListFailed(str(exc)) from exc

    # Access URLs are not resolved yet; clients stream through /stream instead.
    return FileListResponse(
        files=[
            FileListItem(name=PurePosixPath(obj.key).name or obj.key, key=obj.key)
            for obj in page.objects
        ]
    )


@router.get(
    "/stream",
    response_class=StreamingResponse,
    responses={
        status.HTTP_200_OK: {
            "description": "The object content.",
            "content": {
                DEFAULT_STREAM_CONTENT_TYPE: {"schema": {"type": "string", "format": "binary"}}
            },
        },
        status.HTTP_206_PARTIAL_CONTENT: {"description": "The requested byte range."},
    },
)
async def stream_file(
    key: str | None = Query(default=None, description="Object key to stream"),
    byte_range: str | None = Header(default=None, alias="range"),
    storage: StorageService = Depends(get_storage),
) -> StreamingResponse:
    if not key:
        raise MissingKey()

    try:
        obj = await storage.get_object(key, byte_range=byte_range)
    except StorageError as exc:
        raise StreamFailed(str(exc)) from exc

    headers = {
        "Content-Type": obj.content_type or DEFAULT_STREAM_CONTENT_TYPE,
        "Content-Length": str(obj.content_length),
        "Accept-Ranges": "bytes",
    }
    status_code = status.HTTP_200_OK
    if obj.content_range:
        headers["Content-Range"] = obj.content_range
        status_code = status.HTTP_206_PARTIAL_CONTENT

    return StreamingResponse(
        storage.iter_body(obj),
        status_code=status_code,
        headers=headers,
    )
