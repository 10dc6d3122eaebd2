import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import field_validator

from api.dependencies import get_current_user, get_object_storage
from core.validation import CamelModel, body, check_length
from services.object_storage import ObjectStorageService
from storage import UserRecord

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Objects"])


class MediaAttachment(CamelModel):
    media_url: str
    file_type: str | None = None

    @field_validator("media_url")
    @classmethod
    def _media_url(cls, value: str) -> str:
        return check_length(value, 1, 2000, "Media URL")


@router.get("/objects/{object_path:path}")
async def download_object(
    object_path: str,
    objects: ObjectStorageService = Depends(get_object_storage),
):
    stored = await objects.open_object(object_path)
    headers = {"Cache-Control": f"public, max-age={objects.cache_ttl_seconds}"}
    if stored.content_length is not None:
        headers["Content-Length"] = str(stored.content_length)
    return StreamingResponse(stored.chunks, media_type=stored.content_type, headers=headers)


@router.post("/api/objects/upload")
async def upload_url(
    user: UserRecord = Depends(get_current_user),
    objects: ObjectStorageService = Depends(get_object_storage),
):
    url = await objects.get_upload_url()
    logger.info("Upload URL issued to %s", user.username)
    return {"uploadURL": url}


@router.put("/api/media-attachments")
async def register_media_attachment(
    user: UserRecord = Depends(get_current_user),
    data: MediaAttachment = Depends(body(MediaAttachment)),
    objects: ObjectStorageService = Depends(get_object_storage),
):
    object_path = objects.normalize_object_path(data.media_url)
    return {"objectPath": object_path, "fileType": data.file_type}
