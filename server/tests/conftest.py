import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("GAME_MASTER_SECRET", "test-gm-secret")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_ATTEMPTS_PER_MINUTE", "5")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from main import create_app
from services.object_storage import ObjectStorageService
from storage.database import SqlStorage
from storage.memory import MemoryStorage

GM_SECRET = "test-gm-secret"
CODEWORD = "pass1234"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def object_storage(s3_client):
    return ObjectStorageService(bucket="test-bucket", region="us-west-2", client=s3_client)


@pytest.fixture
def app(storage, object_storage):
    return create_app(storage=storage, object_storage=object_storage)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def new_client(app, client):
    """Extra cookie jars against the already started app, one per player."""

    def _make() -> TestClient:
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def player(new_client):
    """Register a player on a fresh client; returns (client, user)."""

    def _register(username: str, codeword: str = CODEWORD):
        c = new_client()
        resp = c.post("/api/auth/register", json={"username": username, "codeword": codeword})
        assert resp.status_code == 201, resp.text
        return c, resp.json()["user"]

    return _register


@pytest.fixture
def game_master(new_client):
    def _register(username: str = "Narrator", codeword: str = CODEWORD):
        c = new_client()
        resp = c.post(
            "/api/auth/gamemaster",
            json={"username": username, "codeword": codeword, "secretKey": GM_SECRET},
        )
        assert resp.status_code == 201, resp.text
        return c, resp.json()["user"]

    return _register


@pytest.fixture(params=["memory", "sql"])
async def any_storage(request):
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    sql_storage = SqlStorage(engine)
    await sql_storage.startup()
    yield sql_storage
    await sql_storage.close()
