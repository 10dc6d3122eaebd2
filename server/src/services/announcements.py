import logging

from core.errors import NotFound
from core.sanitization import sanitize_text
from storage import AnnouncementRecord, Storage, UserRecord

logger = logging.getLogger(__name__)


def _present(announcement: AnnouncementRecord, author: UserRecord | None) -> dict:
    return {
        "id": announcement.id,
        "gameMasterId": announcement.game_master_id,
        "gameMasterUsername": author.username if author else None,
        "title": announcement.title,
        "content": announcement.content,
        "mediaUrl": announcement.media_url,
        "mediaType": announcement.media_type,
        "createdAt": announcement.created_at,
    }


class AnnouncementService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def create(
        self,
        game_master: UserRecord,
        title: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> dict:
        announcement = await self.storage.create_announcement(
            game_master_id=game_master.id,
            title=sanitize_text(title),
            content=sanitize_text(content),
            media_url=media_url,
            media_type=media_type if media_url else None,
        )
        logger.info("Announcement %r posted by %s", announcement.title, game_master.username)
        return _present(announcement, game_master)

    async def list_all(self) -> list[dict]:
        users = {u.id: u for u in await self.storage.get_all_users()}
        return [
            _present(a, users.get(a.game_master_id))
            for a in await self.storage.get_announcements()
        ]

    async def delete(self, announcement_id: str) -> None:
        if not await self.storage.delete_announcement(announcement_id):
            raise NotFound("Announcement not found")
        logger.info("Announcement %s deleted", announcement_id)
