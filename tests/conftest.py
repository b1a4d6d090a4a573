"""Pytest configuration and fixtures for API and service tests."""
import os

# Set test env BEFORE any imports that use config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"

import pytest
from httpx import ASGITransport, AsyncClient

from tournaments.models.base import async_session_factory, reset_db
from web.api.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
async def _reset_db():
    """Fresh tables for every test (ASGI lifespan doesn't run with httpx)."""
    await reset_db()


@pytest.fixture
async def client():
    """Async HTTP client for testing the API."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def session():
    """Database session for calling services directly."""
    async with async_session_factory() as s:
        yield s


@pytest.fixture
def create_chain(client):
    """Create tournaments each nested under the previous one. Returns their names."""

    async def _create(*names: str) -> list[str]:
        parent = None
        for name in names:
            r = await client.post("/api/tournaments", json={"name": name, "parentTournamentName": parent})
            assert r.status_code == 201, r.text
            parent = name
        return list(names)

    return _create


@pytest.fixture
def create_player(client):
    async def _create(gamertag: str, name: str = "Some Player", age: int = 20) -> dict:
        r = await client.post("/api/players", json={"gamertag": gamertag, "name": name, "age": age})
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _create
