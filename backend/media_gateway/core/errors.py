from typing import Any

from fastapi import status


class GatewayError(Exception):
    """Base for failures that map onto a fixed HTTP status and JSON body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Something went wrong!"

    def __init__(self, details: Any = None) -> None:
        super().__init__(self.error if details is None else f"{self.error}: {details}")
        self.details = details

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content


class ClientInputError(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid request"


class MissingFile(ClientInputError):
    error = "No file uploaded"


class MissingKey(ClientInputError):
    error = "Missing key parameter"


class UpstreamStorageError(GatewayError):
    """The object store rejected or failed a call; details carry its message."""

    error = "Storage error"


class UploadFailed(UpstreamStorageError):
    error = "Error uploading file"


class ListFailed(UpstreamStorageError):
    error = "Error fetching files"


class StreamFailed(UpstreamStorageError):
    error = "Error streaming video"


class RouteNotFound(GatewayError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Route not found"


class InternalError(GatewayError):
    error = "Something went wrong!"
