from fastapi import APIRouter, Depends
from pydantic import field_validator

from api.dependencies import get_current_user, get_storage, require_game_master
from core.sanitization import sanitize_text
from core.validation import MediaFields, body, check_length
from services.announcements import AnnouncementService
from storage import Storage, UserRecord

router = APIRouter(prefix="/api/announcements", tags=["Announcements"])


class CreateAnnouncement(MediaFields):
    title: str
    content: str

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        return check_length(sanitize_text(value), 1, 100, "Title")

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return check_length(sanitize_text(value), 1, 1000, "Content")


@router.post("", status_code=201)
async def create_announcement(
    user: UserRecord = Depends(require_game_master),
    data: CreateAnnouncement = Depends(body(CreateAnnouncement)),
    storage: Storage = Depends(get_storage),
):
    return await AnnouncementService(storage).create(
        game_master=user,
        title=data.title,
        content=data.content,
        media_url=data.media_url,
        media_type=data.media_type,
    )


@router.get("")
async def list_announcements(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await AnnouncementService(storage).list_all()


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: str,
    user: UserRecord = Depends(require_game_master),
    storage: Storage = Depends(get_storage),
):
    await AnnouncementService(storage).delete(announcement_id)
    return {"message": "Announcement deleted"}
