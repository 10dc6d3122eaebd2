from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from core.database import build_session_factory, ping, session_scope
from core.errors import Conflict
from models import Announcement, Base, CardDraw, LoginSession, Message, User, Vote
from storage.base import Storage
from storage.types import (
    AnnouncementRecord,
    CardDrawRecord,
    LoginSessionRecord,
    MessageRecord,
    UserRecord,
    VoteRecord,
)

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        codeword_hash=user.codeword_hash,
        symbol=user.symbol,
        profile_image=user.profile_image,
        is_game_master=user.is_game_master,
        created_at=_aware(user.created_at),
    )


def _message_record(message: Message) -> MessageRecord:
    return MessageRecord(
        id=message.id,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        content=message.content,
        is_private=message.is_private,
        media_url=message.media_url,
        media_type=message.media_type,
        created_at=_aware(message.created_at),
    )


def _announcement_record(announcement: Announcement) -> AnnouncementRecord:
    return AnnouncementRecord(
        id=announcement.id,
        game_master_id=announcement.game_master_id,
        title=announcement.title,
        content=announcement.content,
        media_url=announcement.media_url,
        media_type=announcement.media_type,
        created_at=_aware(announcement.created_at),
    )


def _card_draw_record(draw: CardDraw) -> CardDrawRecord:
    return CardDrawRecord(
        id=draw.id,
        user_id=draw.user_id,
        card_id=draw.card_id,
        card_title=draw.card_title,
        card_type=draw.card_type,
        card_effect=draw.card_effect,
        drawn_at=_aware(draw.drawn_at),
    )


def _login_session_record(login: LoginSession) -> LoginSessionRecord:
    return LoginSessionRecord(
        token=login.token,
        user_id=login.user_id,
        created_at=_aware(login.created_at),
        expires_at=_aware(login.expires_at),
    )


class SqlStorage(Storage):
    """SQLAlchemy-backed storage; one transaction per call."""

    def __init__(self, engine: AsyncEngine, create_tables: bool = True) -> None:
        self.engine = engine
        self.sessions = build_session_factory(engine)
        self.create_tables = create_tables

    async def startup(self) -> None:
        if self.create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ready")

    async def close(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> bool:
        return await ping(self.engine)

    async def get_user(self, user_id: str) -> UserRecord | None:
        async with session_scope(self.sessions) as db:
            user = await db.get(User, user_id)
            return _user_record(user) if user else None

    async def get_user_by_username(self, username: str) -> UserRecord | None:
        async with session_scope(self.sessions) as db:
            user = await db.scalar(select(User).where(User.username == username))
            return _user_record(user) if user else None

    async def create_user(
        self,
        username: str,
        codeword_hash: str,
        symbol: str,
        profile_image: str | None,
        is_game_master: bool = False,
    ) -> UserRecord:
        try:
            async with session_scope(self.sessions) as db:
                user = User(
                    username=username,
                    codeword_hash=codeword_hash,
                    symbol=symbol,
                    profile_image=profile_image,
                    is_game_master=is_game_master,
                )
                db.add(user)
                await db.flush()
                db.add(Vote(voter_id=user.id, target_id=None))
                await db.flush()
                return _user_record(user)
        except IntegrityError:
            # Lost a registration race on the unique username
            raise Conflict("Username already taken")

    async def update_user_codeword(self, user_id: str, codeword_hash: str) -> None:
        async with session_scope(self.sessions) as db:
            user = await db.get(User, user_id)
            if user:
                user.codeword_hash = codeword_hash

    async def get_all_users(self) -> list[UserRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(select(User).order_by(User.created_at))
            return [_user_record(u) for u in result.all()]

    async def get_vote(self, voter_id: str) -> VoteRecord | None:
        async with session_scope(self.sessions) as db:
            vote = await db.get(Vote, voter_id)
            return VoteRecord(vote.voter_id, vote.target_id) if vote else None

    async def set_vote(self, voter_id: str, target_id: str | None) -> None:
        async with session_scope(self.sessions) as db:
            await db.merge(Vote(voter_id=voter_id, target_id=target_id))

    async def count_votes_by_target(self) -> dict[str, int]:
        async with session_scope(self.sessions) as db:
            rows = await db.execute(
                select(Vote.target_id, func.count(Vote.voter_id))
                .where(Vote.target_id.is_not(None))
                .group_by(Vote.target_id)
            )
            return {row[0]: row[1] for row in rows.all()}

    async def get_all_votes(self) -> list[VoteRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(select(Vote))
            return [VoteRecord(v.voter_id, v.target_id) for v in result.all()]

    async def create_message(
        self,
        sender_id: str,
        receiver_id: str | None,
        content: str,
        is_private: bool,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> MessageRecord:
        async with session_scope(self.sessions) as db:
            message = Message(
                sender_id=sender_id,
                receiver_id=receiver_id,
                content=content,
                is_private=is_private,
                media_url=media_url,
                media_type=media_type,
            )
            db.add(message)
            await db.flush()
            return _message_record(message)

    async def get_public_messages(self) -> list[MessageRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(
                select(Message)
                .where(Message.is_private.is_(False))
                .order_by(Message.created_at)
            )
            return [_message_record(m) for m in result.all()]

    async def get_private_thread(self, user_a: str, user_b: str) -> list[MessageRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(
                select(Message)
                .where(
                    Message.is_private.is_(True),
                    or_(
                        and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                        and_(Message.sender_id == user_b, Message.receiver_id == user_a),
                    ),
                )
                .order_by(Message.created_at)
            )
            return [_message_record(m) for m in result.all()]

    async def get_private_messages_received(self, user_id: str) -> list[MessageRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(
                select(Message)
                .where(Message.is_private.is_(True), Message.receiver_id == user_id)
                .order_by(Message.created_at.desc())
            )
            return [_message_record(m) for m in result.all()]

    async def get_all_private_messages(self) -> list[MessageRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(
                select(Message)
                .where(Message.is_private.is_(True))
                .order_by(Message.created_at.desc())
            )
            return [_message_record(m) for m in result.all()]

    async def create_announcement(
        self,
        game_master_id: str,
        title: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> AnnouncementRecord:
        async with session_scope(self.sessions) as db:
            announcement = Announcement(
                game_master_id=game_master_id,
                title=title,
                content=content,
                media_url=media_url,
                media_type=media_type,
            )
            db.add(announcement)
            await db.flush()
            return _announcement_record(announcement)

    async def get_announcements(self) -> list[AnnouncementRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(
                select(Announcement).order_by(Announcement.created_at.desc())
            )
            return [_announcement_record(a) for a in result.all()]

    async def delete_announcement(self, announcement_id: str) -> bool:
        async with session_scope(self.sessions) as db:
            result = await db.execute(
                delete(Announcement).where(Announcement.id == announcement_id)
            )
            return result.rowcount > 0

    async def create_card_draw(
        self,
        user_id: str,
        card_id: str,
        card_title: str,
        card_type: str,
        card_effect: str,
        drawn_at: datetime,
    ) -> CardDrawRecord:
        async with session_scope(self.sessions) as db:
            draw = CardDraw(
                user_id=user_id,
                card_id=card_id,
                card_title=card_title,
                card_type=card_type,
                card_effect=card_effect,
                drawn_at=drawn_at,
            )
            db.add(draw)
            await db.flush()
            return _card_draw_record(draw)

    async def get_latest_card_draw(self, user_id: str) -> CardDrawRecord | None:
        async with session_scope(self.sessions) as db:
            draw = await db.scalar(
                select(CardDraw)
                .where(CardDraw.user_id == user_id)
                .order_by(CardDraw.drawn_at.desc())
                .limit(1)
            )
            return _card_draw_record(draw) if draw else None

    async def get_all_card_draws(self) -> list[CardDrawRecord]:
        async with session_scope(self.sessions) as db:
            result = await db.scalars(select(CardDraw).order_by(CardDraw.drawn_at.desc()))
            return [_card_draw_record(d) for d in result.all()]

    async def create_login_session(
        self, token: str, user_id: str, expires_at: datetime
    ) -> LoginSessionRecord:
        async with session_scope(self.sessions) as db:
            login = LoginSession(token=token, user_id=user_id, expires_at=expires_at)
            db.add(login)
            await db.flush()
            return _login_session_record(login)

    async def get_login_session(self, token: str) -> LoginSessionRecord | None:
        async with session_scope(self.sessions) as db:
            login = await db.get(LoginSession, token)
            return _login_session_record(login) if login else None

    async def delete_login_session(self, token: str) -> None:
        async with session_scope(self.sessions) as db:
            await db.execute(delete(LoginSession).where(LoginSession.token == token))
