from fastapi import APIRouter, Depends

from api.dependencies import get_storage
from config import settings
from storage import Storage

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    return {"status": "ok", "service": settings.APP_NAME}


@router.get("/health/db")
async def health_db(storage: Storage = Depends(get_storage)):
    ok = await storage.ping()
    return {"database": "ok" if ok else "error"}
