from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["skeleton"])


@router.get("/", response_class=PlainTextResponse)
async def welcome() -> str:
    return "Welcome to the media gateway!"


@router.post("/api/upload")
async def placeholder_upload() -> dict[str, str]:
    return {"message": "upload from API!"}
