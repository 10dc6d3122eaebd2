import hmac
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import field_validator

from api.dependencies import (
    end_session,
    get_current_user,
    get_login_limiter,
    get_session_service,
    get_storage,
    start_session,
)
from config import settings
from core.errors import PermissionDenied, TooManyRequests
from core.rate_limiter import RateLimiter
from core.sanitization import sanitize_username
from core.validation import CamelModel, body, check_length
from services.auth import AuthService, public_user
from services.sessions import SessionService
from storage import Storage, UserRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class Credentials(CamelModel):
    username: str
    codeword: str

    @field_validator("username")
    @classmethod
    def _username(cls, value: str) -> str:
        return check_length(sanitize_username(value), 3, 18, "Username")

    @field_validator("codeword")
    @classmethod
    def _codeword(cls, value: str) -> str:
        return check_length(value, 4, 32, "Code word")


class GameMasterCredentials(Credentials):
    secret_key: str = ""


class ChangeCodeword(CamelModel):
    old_codeword: str
    new_codeword: str

    @field_validator("old_codeword")
    @classmethod
    def _old(cls, value: str) -> str:
        return check_length(value, 1, 32, "Current code word")

    @field_validator("new_codeword")
    @classmethod
    def _new(cls, value: str) -> str:
        return check_length(value, 4, 32, "New code word")


@router.post("/register", status_code=201)
async def register(
    request: Request,
    data: Credentials = Depends(body(Credentials)),
    storage: Storage = Depends(get_storage),
    sessions: SessionService = Depends(get_session_service),
):
    user = await AuthService(storage).register(data.username, data.codeword)
    await start_session(request, sessions, user)
    return {"user": public_user(user)}


@router.post("/gamemaster", status_code=201)
async def register_game_master(
    request: Request,
    data: GameMasterCredentials = Depends(body(GameMasterCredentials)),
    storage: Storage = Depends(get_storage),
    sessions: SessionService = Depends(get_session_service),
):
    if not hmac.compare_digest(
        data.secret_key.encode("utf-8"), settings.GAME_MASTER_SECRET.encode("utf-8")
    ):
        logger.warning("Rejected game master registration for %s", data.username)
        raise PermissionDenied("Invalid Game Master secret key")

    user = await AuthService(storage).register(
        data.username, data.codeword, is_game_master=True
    )
    await start_session(request, sessions, user)
    return {"user": public_user(user)}


@router.post("/login")
async def login(
    request: Request,
    data: Credentials = Depends(body(Credentials)),
    storage: Storage = Depends(get_storage),
    limiter: RateLimiter = Depends(get_login_limiter),
    sessions: SessionService = Depends(get_session_service),
):
    key = data.username.casefold()
    if not limiter.is_allowed(key):
        raise TooManyRequests("Too many login attempts, try again in a minute")

    user = await AuthService(storage).authenticate(data.username, data.codeword)
    limiter.forget(key)
    await start_session(request, sessions, user)
    return {"user": public_user(user)}


@router.post("/logout")
async def logout(
    request: Request,
    sessions: SessionService = Depends(get_session_service),
):
    await end_session(request, sessions)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def me(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    current_vote = await AuthService(storage).current_vote_target(user)
    return {"user": public_user(user), "currentVote": current_vote}


@router.post("/change-codeword")
async def change_codeword(
    user: UserRecord = Depends(get_current_user),
    data: ChangeCodeword = Depends(body(ChangeCodeword)),
    storage: Storage = Depends(get_storage),
):
    await AuthService(storage).change_codeword(user, data.old_codeword, data.new_codeword)
    return {"message": "Code word updated successfully"}
