import logging
import secrets
from datetime import datetime, timedelta, timezone

from storage import Storage, UserRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionService:
    """Server-side login sessions; the cookie only ever carries the random token."""

    def __init__(self, storage: Storage, max_age: timedelta):
        self.storage = storage
        self.max_age = max_age

    async def open(self, user: UserRecord) -> str:
        token = secrets.token_urlsafe(32)
        await self.storage.create_login_session(
            token=token, user_id=user.id, expires_at=utcnow() + self.max_age
        )
        return token

    async def resolve(self, token: str) -> UserRecord | None:
        """Return the session's user, or None once it is unknown, expired or orphaned."""
        login = await self.storage.get_login_session(token)
        if not login:
            return None
        if login.expires_at <= utcnow():
            logger.info("Session for user %s expired", login.user_id)
            await self.storage.delete_login_session(token)
            return None
        user = await self.storage.get_user(login.user_id)
        if not user:
            await self.storage.delete_login_session(token)
        return user

    async def close(self, token: str) -> None:
        await self.storage.delete_login_session(token)
