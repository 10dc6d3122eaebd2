import logging

from core.errors import NotFound, PermissionDenied, ValidationFailed
from services.auth import public_user
from storage import Storage, UserRecord

logger = logging.getLogger(__name__)


def _username_key(user: UserRecord) -> str:
    return user.username.casefold()


def rank_suspicion(users: list[UserRecord], counts: dict[str, int]) -> list[dict]:
    """Vote tally for every user, most suspected first, ties by username."""
    ranked = [
        {
            "userId": user.id,
            "username": user.username,
            "symbol": user.symbol,
            "profileImage": user.profile_image,
            "voteCount": counts.get(user.id, 0),
        }
        for user in users
    ]
    ranked.sort(key=lambda row: (-row["voteCount"], row["username"].casefold()))
    return ranked


class VoteService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def players(self) -> list[dict]:
        users = await self.storage.get_all_users()
        return [public_user(u) for u in sorted(users, key=_username_key)]

    async def cast(self, voter: UserRecord, target_id: str) -> UserRecord:
        if voter.is_game_master:
            raise PermissionDenied("Game Masters do not vote")
        if target_id == voter.id:
            raise ValidationFailed("Cannot vote for yourself")

        target = await self.storage.get_user(target_id)
        if not target:
            raise NotFound("Target player not found")
        if target.is_game_master:
            raise ValidationFailed("Cannot vote for the Game Master")

        await self.storage.set_vote(voter.id, target.id)
        logger.info("%s now suspects %s", voter.username, target.username)
        return target

    async def clear(self, voter: UserRecord) -> None:
        await self.storage.set_vote(voter.id, None)

    async def suspicion(self) -> list[dict]:
        users = await self.storage.get_all_users()
        counts = await self.storage.count_votes_by_target()
        return rank_suspicion(users, counts)

    async def details(self) -> list[dict]:
        users = {u.id: u for u in await self.storage.get_all_users()}
        details = []
        for vote in await self.storage.get_all_votes():
            voter = users.get(vote.voter_id)
            if not voter:
                continue
            target = users.get(vote.target_id) if vote.target_id else None
            details.append({
                "voterId": vote.voter_id,
                "voterUsername": voter.username,
                "targetId": vote.target_id,
                "targetUsername": target.username if target else None,
            })
        details.sort(key=lambda row: row["voterUsername"].casefold())
        return details
