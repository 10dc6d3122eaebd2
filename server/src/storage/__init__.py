from __future__ import annotations

import logging

from storage.base import Storage
from storage.types import (
    AnnouncementRecord,
    CardDrawRecord,
    LoginSessionRecord,
    MessageRecord,
    UserRecord,
    VoteRecord,
)

logger = logging.getLogger(__name__)


def create_storage() -> Storage:
    """Factory: build the storage backend named by config."""
    from config import settings

    backend = settings.STORAGE_BACKEND.lower()

    if backend == "memory":
        from storage.memory import MemoryStorage

        instance = MemoryStorage()

    elif backend == "database":
        from core.database import build_engine
        from storage.database import SqlStorage

        instance = SqlStorage(build_engine(settings.DATABASE_URL))

    else:
        raise ValueError(
            f"Unknown storage backend: {backend!r}. Supported: database, memory"
        )

    logger.info("Storage backend: %s", backend)
    return instance


__all__ = [
    "AnnouncementRecord",
    "CardDrawRecord",
    "LoginSessionRecord",
    "MessageRecord",
    "Storage",
    "UserRecord",
    "VoteRecord",
    "create_storage",
]
