import logging

from constants.avatars import profile_image_for, random_symbol
from core.errors import AuthenticationRequired, Conflict
from core.security import hash_codeword, verify_codeword
from storage import Storage, UserRecord

logger = logging.getLogger(__name__)


def public_user(user: UserRecord) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "symbol": user.symbol,
        "profileImage": user.profile_image,
        "isGameMaster": user.is_game_master,
        "createdAt": user.created_at,
    }


class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(
        self, username: str, codeword: str, *, is_game_master: bool = False
    ) -> UserRecord:
        if await self.storage.get_user_by_username(username):
            raise Conflict("Username already taken")

        user = await self.storage.create_user(
            username=username,
            codeword_hash=await hash_codeword(codeword),
            symbol=random_symbol(),
            profile_image=profile_image_for(username),
            is_game_master=is_game_master,
        )
        logger.info(
            "Registered %s%s", user.username, " (game master)" if is_game_master else ""
        )
        return user

    async def authenticate(self, username: str, codeword: str) -> UserRecord:
        user = await self.storage.get_user_by_username(username)
        # Same answer whether or not the username exists
        if not user or not await verify_codeword(codeword, user.codeword_hash):
            logger.warning("Failed login for %s", username)
            raise AuthenticationRequired("Invalid credentials")
        return user

    async def change_codeword(
        self, user: UserRecord, old_codeword: str, new_codeword: str
    ) -> None:
        if not await verify_codeword(old_codeword, user.codeword_hash):
            raise AuthenticationRequired("Current code word is incorrect")
        await self.storage.update_user_codeword(user.id, await hash_codeword(new_codeword))
        logger.info("Code word changed for %s", user.username)

    async def current_vote_target(self, user: UserRecord) -> dict | None:
        vote = await self.storage.get_vote(user.id)
        if not vote or not vote.target_id:
            return None
        target = await self.storage.get_user(vote.target_id)
        if not target:
            return None
        return {"id": target.id, "username": target.username}
