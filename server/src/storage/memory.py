from __future__ import annotations

import uuid
from datetime import datetime, timezone

from core.errors import Conflict
from storage.base import Storage
from storage.types import (
    AnnouncementRecord,
    CardDrawRecord,
    LoginSessionRecord,
    MessageRecord,
    UserRecord,
    VoteRecord,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """Dict-backed storage for development and tests.

    Only safe inside a single event loop: every method runs to completion
    without awaiting anything.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._votes: dict[str, VoteRecord] = {}
        self._messages: list[MessageRecord] = []
        self._announcements: dict[str, AnnouncementRecord] = {}
        self._card_draws: list[CardDrawRecord] = []
        self._login_sessions: dict[str, LoginSessionRecord] = {}

    async def get_user(self, user_id: str) -> UserRecord | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> UserRecord | None:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def create_user(
        self,
        username: str,
        codeword_hash: str,
        symbol: str,
        profile_image: str | None,
        is_game_master: bool = False,
    ) -> UserRecord:
        if any(u.username == username for u in self._users.values()):
            raise Conflict("Username already taken")
        user = UserRecord(
            id=str(uuid.uuid4()),
            username=username,
            codeword_hash=codeword_hash,
            symbol=symbol,
            profile_image=profile_image,
            is_game_master=is_game_master,
            created_at=_utcnow(),
        )
        self._users[user.id] = user
        self._votes[user.id] = VoteRecord(voter_id=user.id, target_id=None)
        return user

    async def update_user_codeword(self, user_id: str, codeword_hash: str) -> None:
        user = self._users.get(user_id)
        if user:
            user.codeword_hash = codeword_hash

    async def get_all_users(self) -> list[UserRecord]:
        return list(self._users.values())

    async def get_vote(self, voter_id: str) -> VoteRecord | None:
        return self._votes.get(voter_id)

    async def set_vote(self, voter_id: str, target_id: str | None) -> None:
        self._votes[voter_id] = VoteRecord(voter_id=voter_id, target_id=target_id)

    async def count_votes_by_target(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for vote in self._votes.values():
            if vote.target_id:
                counts[vote.target_id] = counts.get(vote.target_id, 0) + 1
        return counts

    async def get_all_votes(self) -> list[VoteRecord]:
        return list(self._votes.values())

    async def create_message(
        self,
        sender_id: str,
        receiver_id: str | None,
        content: str,
        is_private: bool,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> MessageRecord:
        message = MessageRecord(
            id=str(uuid.uuid4()),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            is_private=is_private,
            media_url=media_url,
            media_type=media_type,
            created_at=_utcnow(),
        )
        self._messages.append(message)
        return message

    async def get_public_messages(self) -> list[MessageRecord]:
        return [m for m in self._messages if not m.is_private]

    async def get_private_thread(self, user_a: str, user_b: str) -> list[MessageRecord]:
        pair = {user_a, user_b}
        return [
            m for m in self._messages
            if m.is_private and {m.sender_id, m.receiver_id} == pair
        ]

    async def get_private_messages_received(self, user_id: str) -> list[MessageRecord]:
        return [
            m for m in reversed(self._messages)
            if m.is_private and m.receiver_id == user_id
        ]

    async def get_all_private_messages(self) -> list[MessageRecord]:
        return [m for m in reversed(self._messages) if m.is_private]

    async def create_announcement(
        self,
        game_master_id: str,
        title: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> AnnouncementRecord:
        announcement = AnnouncementRecord(
            id=str(uuid.uuid4()),
            game_master_id=game_master_id,
            title=title,
            content=content,
            media_url=media_url,
            media_type=media_type,
            created_at=_utcnow(),
        )
        self._announcements[announcement.id] = announcement
        return announcement

    async def get_announcements(self) -> list[AnnouncementRecord]:
        return list(reversed(self._announcements.values()))

    async def delete_announcement(self, announcement_id: str) -> bool:
        return self._announcements.pop(announcement_id, None) is not None

    async def create_card_draw(
        self,
        user_id: str,
        card_id: str,
        card_title: str,
        card_type: str,
        card_effect: str,
        drawn_at: datetime,
    ) -> CardDrawRecord:
        draw = CardDrawRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            card_id=card_id,
            card_title=card_title,
            card_type=card_type,
            card_effect=card_effect,
            drawn_at=drawn_at,
        )
        self._card_draws.append(draw)
        return draw

    async def get_latest_card_draw(self, user_id: str) -> CardDrawRecord | None:
        draws = [d for d in self._card_draws if d.user_id == user_id]
        if not draws:
            return None
        return max(draws, key=lambda d: d.drawn_at)

    async def get_all_card_draws(self) -> list[CardDrawRecord]:
        return sorted(self._card_draws, key=lambda d: d.drawn_at, reverse=True)

    async def create_login_session(
        self, token: str, user_id: str, expires_at: datetime
    ) -> LoginSessionRecord:
        record = LoginSessionRecord(
            token=token, user_id=user_id, created_at=_utcnow(), expires_at=expires_at
        )
        self._login_sessions[token] = record
        return record

    async def get_login_session(self, token: str) -> LoginSessionRecord | None:
        return self._login_sessions.get(token)

    async def delete_login_session(self, token: str) -> None:
        self._login_sessions.pop(token, None)
