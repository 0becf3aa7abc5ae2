from fastapi import Request

from media_gateway.services.storage import StorageService


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage
