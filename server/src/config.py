from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Secrets — must be set in .env
    SESSION_SECRET: str
    GAME_MASTER_SECRET: str

    APP_NAME: str = "The Traitors"
    STORAGE_BACKEND: str = "database"  # database | memory
    DATABASE_URL: str = "sqlite+aiosqlite:///./traitors.db"

    # Object storage (S3)
    S3_BUCKET: str = "thetraitorsapp"
    S3_REGION: str = "us-west-2"
    UPLOAD_URL_TTL_SECONDS: int = 900
    OBJECT_CACHE_TTL_SECONDS: int = 3600

    # Server-side value is authoritative; the client still advertises a different interval
    CARD_DRAW_COOLDOWN_HOURS: int = 72

    SESSION_MAX_AGE_DAYS: int = 7
    SESSION_COOKIE_SECURE: bool = False
    BCRYPT_ROUNDS: int = 10
    LOGIN_ATTEMPTS_PER_MINUTE: int = 10
    CORS_ORIGINS: list[str] = []

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
