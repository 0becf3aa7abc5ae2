import asyncio
import logging
from collections.abc import AsyncIterator
from pathlib import PurePosixPath
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from media_gateway.core.config import Settings
from media_gateway.schemas import ObjectPage, StoredObject, StreamedObject, UploadedObject

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a call to the object store fails."""


def object_key_for(filename: str) -> str:
    """Derive the object key from a client filename, dropping any directory parts.

    Returns an empty string when nothing usable is left (e.g. ``".."``).
    """
    name = PurePosixPath(filename.replace("\\", "/")).name
    return "" if name in {".", ".."} else name


class StorageService:
    """Thin async wrapper around an S3-compatible bucket."""

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self.settings = settings
        self.bucket = settings.s3_bucket
        self.chunk_size = settings.stream_chunk_size
        self.client = client or self._create_client(settings)

    @staticmethod
    def _create_client(settings: Settings) -> Any:
        session = boto3.session.Session()
        return session.client(
            "s3",
            endpoint_url=str(settings.s3_endpoint) if settings.s3_endpoint else None,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            region_name=settings.s3_region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path" if settings.s3_force_path_style else "auto"},
                connect_timeout=settings.s3_connect_timeout,
                read_timeout=settings.s3_read_timeout,
                retries={"total_max_attempts": 1},
            ),
        )

    async def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        method = getattr(self.client, operation)
        try:
            return await asyncio.to_thread(method, Bucket=self.bucket, **params)
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 %s on bucket %s failed: %s", operation, self.bucket, exc)
            raise StorageError(str(exc)) from exc

    async def put_object(self, obj: UploadedObject) -> None:
        await self._call(
            "put_object",
            Key=obj.key,
            Body=obj.data,
            ContentType=obj.content_type,
        )
        logger.info("Stored %s (%d bytes, %s)", obj.key, len(obj.data), obj.content_type)

    async def list_objects(self) -> ObjectPage:
        # One page only; callers get whatever a single ListObjectsV2 returns.
        response = await self._call("list_objects_v2")
        page = ObjectPage(
            objects=[
                StoredObject(
                    key=item["Key"],
                    size=item.get("Size", 0),
                    last_modified=item.get("LastModified"),
                )
                for item in response.get("Contents", [])
            ],
            is_truncated=response.get("IsTruncated", False),
        )
        if page.is_truncated:
            logger.warning(
                "Listing of bucket %s truncated at %d objects", self.bucket, len(page.objects)
            )
        return page

    async def get_object(self, key: str, byte_range: str | None = None) -> StreamedObject:
        params: dict[str, Any] = {"Key": key}
        if byte_range:
            params["Range"] = byte_range
        response = await self._call("get_object", **params)
        return StreamedObject(
            key=key,
            content_type=response.get("ContentType"),
            content_length=response["ContentLength"],
            content_range=response.get("ContentRange"),
            body=response["Body"],
        )

    async def iter_body(self, obj: StreamedObject) -> AsyncIterator[bytes]:
        """Relay an object's body chunk by chunk, always releasing the upstream handle.

        A chunk is only read once the previous one has been consumed, so a slow
        client slows the read from the store. Cancellation (client disconnect)
        and read failures both end in ``close()``; failures are re-raised so the
        server aborts the already-started response.
        """
        body = obj.body
        sent = 0
        try:
            while True:
                chunk = await asyncio.to_thread(body.read, self.chunk_size)
                if not chunk:
                    break
                sent += len(chunk)
                yield chunk
        except Exception:
            logger.exception(
                "Stream of %s aborted after %d of %d bytes", obj.key, sent, obj.content_length
            )
            raise
        finally:
            # A cancelled read may still be running in its thread; its result is discarded.
            body.close()
