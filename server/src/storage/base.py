from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storage.types import (
    AnnouncementRecord,
    CardDrawRecord,
    LoginSessionRecord,
    MessageRecord,
    UserRecord,
    VoteRecord,
)


class Storage(ABC):
    """Persistence for the game tables and login sessions.

    Implementations return plain records; ordering and aggregation rules that
    are part of the game live in the services, not here.
    """

    async def startup(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    async def ping(self) -> bool:
        return True

    # Users

    @abstractmethod
    async def get_user(self, user_id: str) -> UserRecord | None:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> UserRecord | None:
        ...

    @abstractmethod
    async def create_user(
        self,
        username: str,
        codeword_hash: str,
        symbol: str,
        profile_image: str | None,
        is_game_master: bool = False,
    ) -> UserRecord:
        """Insert a user together with its empty vote row."""

    @abstractmethod
    async def update_user_codeword(self, user_id: str, codeword_hash: str) -> None:
        ...

    @abstractmethod
    async def get_all_users(self) -> list[UserRecord]:
        ...

    # Votes

    @abstractmethod
    async def get_vote(self, voter_id: str) -> VoteRecord | None:
        ...

    @abstractmethod
    async def set_vote(self, voter_id: str, target_id: str | None) -> None:
        """Blind upsert keyed by voter id."""

    @abstractmethod
    async def count_votes_by_target(self) -> dict[str, int]:
        ...

    @abstractmethod
    async def get_all_votes(self) -> list[VoteRecord]:
        ...

    # Messages

    @abstractmethod
    async def create_message(
        self,
        sender_id: str,
        receiver_id: str | None,
        content: str,
        is_private: bool,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> MessageRecord:
        ...

    @abstractmethod
    async def get_public_messages(self) -> list[MessageRecord]:
        """Oldest first."""

    @abstractmethod
    async def get_private_thread(self, user_a: str, user_b: str) -> list[MessageRecord]:
        """Private messages exchanged between two users, oldest first."""

    @abstractmethod
    async def get_private_messages_received(self, user_id: str) -> list[MessageRecord]:
        """Newest first."""

    @abstractmethod
    async def get_all_private_messages(self) -> list[MessageRecord]:
        """Newest first."""

    # Announcements

    @abstractmethod
    async def create_announcement(
        self,
        game_master_id: str,
        title: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> AnnouncementRecord:
        ...

    @abstractmethod
    async def get_announcements(self) -> list[AnnouncementRecord]:
        """Newest first."""

    @abstractmethod
    async def delete_announcement(self, announcement_id: str) -> bool:
        """Return False when nothing was deleted."""

    # Card draws

    @abstractmethod
    async def create_card_draw(
        self,
        user_id: str,
        card_id: str,
        card_title: str,
        card_type: str,
        card_effect: str,
        drawn_at: datetime,
    ) -> CardDrawRecord:
        ...

    @abstractmethod
    async def get_latest_card_draw(self, user_id: str) -> CardDrawRecord | None:
        ...

    @abstractmethod
    async def get_all_card_draws(self) -> list[CardDrawRecord]:
        """Newest first."""

    # Login sessions

    @abstractmethod
    async def create_login_session(
        self, token: str, user_id: str, expires_at: datetime
    ) -> LoginSessionRecord:
        ...

    @abstractmethod
    async def get_login_session(self, token: str) -> LoginSessionRecord | None:
        ...

    @abstractmethod
    async def delete_login_session(self, token: str) -> None:
        """No-op for unknown tokens."""
