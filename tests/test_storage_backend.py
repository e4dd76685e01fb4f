"""
Memory backend tests - the whole API works without opening a database session.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from petfinder.config import get_settings
from petfinder.db.repositories import InMemoryStore
from petfinder.main import app


def _no_database():
    raise AssertionError("memory backend must not open a database session")


@pytest.fixture
def memory_client(monkeypatch):
    store = InMemoryStore()
    monkeypatch.setattr(get_settings(), "storage_backend", "memory")
    monkeypatch.setattr("petfinder.core.dependencies.get_memory_store", lambda: store)
    monkeypatch.setattr("petfinder.core.dependencies.session_scope", _no_database)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_register_and_announce_on_memory_backend(memory_client: AsyncClient):
    async with memory_client as client:
        registered = await client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "ana@email.com", "password": "123456", "phone": "(71) 90000-0000"},
        )
        assert registered.status_code == 201
        headers = {"Authorization": f"Bearer {registered.json()['token']}"}

        created = await client.post(
            "/api/announcements",
            headers=headers,
            json={"pet_name": "Rex", "description": "Brown dog", "type": "lost", "neighborhood": "Barra"},
        )
        assert created.status_code == 201

        listing = await client.get("/api/announcements")
        assert [a["pet_name"] for a in listing.json()] == ["Rex"]
        assert listing.json()[0]["user"]["email"] == "ana@email.com"
