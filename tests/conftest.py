"""
Pytest fixtures - test DB, client, auth.
API tests run against SQLite (aiosqlite) through the real SQL repositories;
service tests use the in-memory repositories.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from petfinder.core.dependencies import get_repositories, sql_repositories
from petfinder.core.security import hash_password, issue_user_token
from petfinder.db.base import Base
from petfinder.db.models import User
from petfinder.db.repositories import InMemoryStore, Repositories
from petfinder.db.session import get_db
from petfinder.main import app

# One in-memory database per test; StaticPool keeps it on a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Smallest valid PNG: 1x1 transparent pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_repositories] = lambda: sql_repositories(session)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    user = User(
        name="Maria Souza",
        email="maria@email.com",
        password=hash_password("123456"),
        phone="(71) 99999-0001",
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    user = User(
        name="Joao Lima",
        email="joao@email.com",
        password=hash_password("abcdef"),
        phone="(71) 99999-0002",
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return {"Authorization": f"Bearer {issue_user_token(test_user.id, test_user.email)}"}


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {issue_user_token(other_user.id, other_user.email)}"}


@pytest.fixture
def create_announcement(client: AsyncClient):
    """POST a JSON announcement and return the created body."""

    async def _create(headers: dict, **overrides) -> dict:
        payload = {
            "pet_name": "Rex",
            "description": "Caramel mutt with a blue collar",
            "type": "lost",
            "neighborhood": "Barra",
        }
        payload.update(overrides)
        response = await client.post("/api/announcements", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["announcement"]

    return _create


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_repos(memory_store: InMemoryStore) -> Repositories:
    return memory_store.repositories()
