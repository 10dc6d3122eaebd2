from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserRecord:
    id: str
    username: str
    codeword_hash: str
    symbol: str
    profile_image: str | None
    is_game_master: bool
    created_at: datetime


@dataclass
class VoteRecord:
    voter_id: str
    target_id: str | None


@dataclass
class MessageRecord:
    id: str
    sender_id: str
    receiver_id: str | None
    content: str
    is_private: bool
    media_url: str | None
    media_type: str | None
    created_at: datetime


@dataclass
class AnnouncementRecord:
    id: str
    game_master_id: str
    title: str
    content: str
    media_url: str | None
    media_type: str | None
    created_at: datetime


@dataclass
class CardDrawRecord:
    id: str
    user_id: str
    card_id: str
    card_title: str
    card_type: str
    card_effect: str
    drawn_at: datetime


@dataclass
class LoginSessionRecord:
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime
