from fastapi import APIRouter, Depends
from pydantic import field_validator, model_validator

from api.dependencies import get_current_user, get_storage, require_game_master
from core.errors import ValidationFailed
from core.sanitization import sanitize_text
from core.validation import MediaFields, body, check_length
from services.messages import MessageService
from storage import Storage, UserRecord

router = APIRouter(prefix="/api/messages", tags=["Messages"])


class SendMessage(MediaFields):
    content: str
    is_private: bool = False
    receiver_id: str | None = None

    @field_validator("content")
    @classmethod
    def _content(cls, value: str) -> str:
        return check_length(sanitize_text(value), 1, 500, "Message")

    @model_validator(mode="after")
    def _receiver(self) -> "SendMessage":
        # Public messages never carry a receiver
        if not self.is_private:
            self.receiver_id = None
        return self


@router.post("", status_code=201)
async def send_message(
    user: UserRecord = Depends(get_current_user),
    data: SendMessage = Depends(body(SendMessage)),
    storage: Storage = Depends(get_storage),
):
    if data.is_private and not data.receiver_id:
        raise ValidationFailed("Private messages require a receiver")
    return await MessageService(storage).send(
        sender=user,
        content=data.content,
        is_private=data.is_private,
        receiver_id=data.receiver_id,
        media_url=data.media_url,
        media_type=data.media_type,
    )


@router.get("/public")
async def public_messages(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).public_feed()


@router.get("/inbox")
async def inbox(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).inbox(user)


# Fixed paths must be registered before /private/{target_id}
@router.get("/private/received")
async def received_messages(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).received(user)


@router.get("/private/count")
async def received_count(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).received_count(user)


@router.get("/private/admin/all")
async def all_private_messages(
    user: UserRecord = Depends(require_game_master),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).all_private()


@router.get("/private/{target_id}")
async def private_thread(
    target_id: str,
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await MessageService(storage).private_thread(user, target_id)
