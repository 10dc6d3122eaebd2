from unittest.mock import AsyncMock, patch

from sqlalchemy.ext.asyncio import create_async_engine

from core.database import ping


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_health_db(client):
    assert client.get("/health/db").json() == {"database": "ok"}


def test_health_db_hides_failure_details(client, storage):
    with patch.object(storage, "ping", AsyncMock(return_value=False)):
        resp = client.get("/health/db")
    assert resp.json() == {"database": "error"}


async def test_ping_logs_instead_of_returning_the_error(caplog):
    engine = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/x.db")
    try:
        assert await ping(engine) is False
    finally:
        await engine.dispose()
    assert "Database ping failed" in caplog.text


def test_unknown_route_uses_message_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.json()
