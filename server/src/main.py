import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from api.announcements import router as announcements_router
from api.auth import router as auth_router
from api.cards import router as cards_router
from api.health import router as health_router
from api.messages import router as messages_router
from api.objects import router as objects_router
from api.votes import router as votes_router
from config import settings
from core.errors import AppError
from core.rate_limiter import RateLimiter
from services.object_storage import ObjectStorageService
from storage import Storage, create_storage

logger = logging.getLogger("uvicorn.error")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid input"
    return JSONResponse(status_code=400, content={"message": message})


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    storage: Storage | None = None,
    object_storage: ObjectStorageService | None = None,
) -> FastAPI:
    """Build the application; backends default to the ones named by config."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.storage = storage or create_storage()
        await app.state.storage.startup()
        app.state.object_storage = object_storage or ObjectStorageService(
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            upload_ttl_seconds=settings.UPLOAD_URL_TTL_SECONDS,
            cache_ttl_seconds=settings.OBJECT_CACHE_TTL_SECONDS,
        )
        logger.info(
            "%s ready: storage=%s bucket=%s",
            settings.APP_NAME,
            type(app.state.storage).__name__,
            app.state.object_storage.bucket,
        )

        yield
        await app.state.storage.close()

    app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
    app.state.login_limiter = RateLimiter(settings.LOGIN_ATTEMPTS_PER_MINUTE)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie="traitors_session",
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        same_site="lax",
        https_only=settings.SESSION_COOKIE_SECURE,
    )
    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type"],
        )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(votes_router)
    app.include_router(messages_router)
    app.include_router(announcements_router)
    app.include_router(cards_router)
    app.include_router(objects_router)
    return app


app = create_app()
