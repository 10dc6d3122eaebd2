import logging
from datetime import datetime, timedelta, timezone

from config import settings
from core.errors import TooManyRequests
from storage import CardDrawRecord, Storage, UserRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def present_draw(draw: CardDrawRecord) -> dict:
    return {
        "id": draw.id,
        "userId": draw.user_id,
        "cardId": draw.card_id,
        "cardTitle": draw.card_title,
        "cardType": draw.card_type,
        "cardEffect": draw.card_effect,
        "drawnAt": draw.drawn_at,
    }


class CardService:
    """Records Dark Deck draws and enforces the per-user cooldown."""

    def __init__(self, storage: Storage, cooldown: timedelta | None = None):
        self.storage = storage
        self.cooldown = cooldown or timedelta(hours=settings.CARD_DRAW_COOLDOWN_HOURS)

    async def eligibility(self, user: UserRecord) -> dict:
        last = await self.storage.get_latest_card_draw(user.id)
        now = utcnow()
        next_draw_at = last.drawn_at + self.cooldown if last else None
        return {
            "canDraw": next_draw_at is None or now >= next_draw_at,
            "nextDrawAt": next_draw_at,
            "lastDraw": present_draw(last) if last else None,
            "cooldownHours": int(self.cooldown.total_seconds() // 3600),
        }

    async def draw(
        self,
        user: UserRecord,
        card_id: str,
        card_title: str,
        card_type: str,
        card_effect: str,
    ) -> dict:
        status = await self.eligibility(user)
        if not status["canDraw"]:
            raise TooManyRequests(
                "The Dark Deck is sealed for you until "
                f"{status['nextDrawAt'].isoformat()}"
            )

        draw = await self.storage.create_card_draw(
            user_id=user.id,
            card_id=card_id,
            card_title=card_title,
            card_type=card_type,
            card_effect=card_effect,
            drawn_at=utcnow(),
        )
        logger.info("%s drew %s", user.username, draw.card_id)
        return {
            "draw": present_draw(draw),
            "nextDrawAt": draw.drawn_at + self.cooldown,
        }

    async def all_draws(self) -> list[dict]:
        users = {u.id: u for u in await self.storage.get_all_users()}
        draws = []
        for draw in await self.storage.get_all_card_draws():
            data = present_draw(draw)
            user = users.get(draw.user_id)
            data["username"] = user.username if user else None
            draws.append(data)
        return draws
