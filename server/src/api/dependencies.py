from collections.abc import Callable
from datetime import timedelta

from fastapi import Depends, Request

from config import settings
from core.errors import AuthenticationRequired, PermissionDenied
from core.rate_limiter import RateLimiter
from services.object_storage import ObjectStorageService
from services.sessions import SessionService
from storage import Storage, UserRecord

SESSION_TOKEN_KEY = "sid"


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_object_storage(request: Request) -> ObjectStorageService:
    return request.app.state.object_storage


def get_login_limiter(request: Request) -> RateLimiter:
    return request.app.state.login_limiter


def get_session_service(storage: Storage = Depends(get_storage)) -> SessionService:
    return SessionService(storage, timedelta(days=settings.SESSION_MAX_AGE_DAYS))


async def start_session(request: Request, sessions: SessionService, user: UserRecord) -> None:
    await end_session(request, sessions)
    request.session[SESSION_TOKEN_KEY] = await sessions.open(user)


async def end_session(request: Request, sessions: SessionService) -> None:
    token = request.session.get(SESSION_TOKEN_KEY)
    if token:
        await sessions.close(token)
    request.session.clear()


async def get_current_user(
    request: Request,
    sessions: SessionService = Depends(get_session_service),
) -> UserRecord:
    token = request.session.get(SESSION_TOKEN_KEY)
    if not token:
        raise AuthenticationRequired("Authentication required")
    user = await sessions.resolve(token)
    if not user:
        request.session.clear()
        raise AuthenticationRequired("Authentication required")
    return user


def is_game_master(user: UserRecord) -> bool:
    return user.is_game_master


def require_capability(predicate: Callable[[UserRecord], bool], message: str):
    """Build a dependency that lets through only users satisfying ``predicate``."""

    async def guard(user: UserRecord = Depends(get_current_user)) -> UserRecord:
        if not predicate(user):
            raise PermissionDenied(message)
        return user

    return guard


require_game_master = require_capability(is_game_master, "Game Master access required")
