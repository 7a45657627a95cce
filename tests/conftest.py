"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from grove.db.base import Base
from grove.db.session import build_engine, build_session_maker, get_db
from grove.main import app
from grove.services.llm import get_completion_client
from tests.factories import FakeCompletionClient, create_user


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine():
    """In-memory SQLite with the full schema."""
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def user(db):
    return await create_user(db)


@pytest.fixture
async def other_user(db):
    return await create_user(db, name="Other User")


@pytest.fixture
def fake_llm():
    return FakeCompletionClient()


@pytest.fixture
async def client(session_maker, fake_llm):
    """HTTP client against the app, backed by the in-memory database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_client] = lambda: fake_llm
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
