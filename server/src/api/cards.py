from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import field_validator

from api.dependencies import get_current_user, get_storage, require_game_master
from constants.cards import FATE_CARDS
from core.validation import CamelModel, body, check_length
from services.cards import CardService
from storage import Storage, UserRecord

router = APIRouter(prefix="/api/cards", tags=["Cards"])


class DrawCard(CamelModel):
    card_id: str
    card_title: str
    card_type: Literal["challenge", "advantage", "disadvantage"]
    card_effect: str

    @field_validator("card_id")
    @classmethod
    def _card_id(cls, value: str) -> str:
        return check_length(value, 1, 50, "Card id")

    @field_validator("card_title")
    @classmethod
    def _card_title(cls, value: str) -> str:
        return check_length(value, 1, 100, "Card title")

    @field_validator("card_effect")
    @classmethod
    def _card_effect(cls, value: str) -> str:
        return check_length(value, 1, 500, "Card effect")


@router.get("/catalog")
async def catalog(user: UserRecord = Depends(get_current_user)):
    return FATE_CARDS


@router.get("/can-draw")
async def can_draw(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await CardService(storage).eligibility(user)


@router.post("/draw", status_code=201)
async def draw_card(
    user: UserRecord = Depends(get_current_user),
    data: DrawCard = Depends(body(DrawCard)),
    storage: Storage = Depends(get_storage),
):
    return await CardService(storage).draw(
        user,
        card_id=data.card_id,
        card_title=data.card_title,
        card_type=data.card_type,
        card_effect=data.card_effect,
    )


@router.get("/draws")
async def all_draws(
    user: UserRecord = Depends(require_game_master),
    storage: Storage = Depends(get_storage),
):
    return await CardService(storage).all_draws()
