import uuid

from fastapi import APIRouter, Depends
from pydantic import field_validator
from pydantic_core import PydanticCustomError

from api.dependencies import get_current_user, get_storage, require_game_master
from core.validation import CamelModel, body
from services.votes import VoteService
from storage import Storage, UserRecord

router = APIRouter(prefix="/api", tags=["Votes"])


class CastVote(CamelModel):
    target_id: str

    @field_validator("target_id")
    @classmethod
    def _target(cls, value: str) -> str:
        try:
            uuid.UUID(value)
        except ValueError:
            raise PydanticCustomError("invalid_target", "Invalid target player id")
        return value


@router.get("/players")
async def players(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await VoteService(storage).players()


@router.post("/votes")
@router.post("/vote", include_in_schema=False)
async def cast_vote(
    user: UserRecord = Depends(get_current_user),
    data: CastVote = Depends(body(CastVote)),
    storage: Storage = Depends(get_storage),
):
    target = await VoteService(storage).cast(user, data.target_id)
    return {
        "message": "Vote cast successfully",
        "target": {"id": target.id, "username": target.username},
    }


@router.delete("/votes")
@router.delete("/vote", include_in_schema=False)
async def clear_vote(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    await VoteService(storage).clear(user)
    return {"message": "Vote cleared successfully"}


@router.get("/suspicion")
async def suspicion(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await VoteService(storage).suspicion()


@router.get("/votes/details")
async def vote_details(
    user: UserRecord = Depends(require_game_master),
    storage: Storage = Depends(get_storage),
):
    return await VoteService(storage).details()
