"""
Shared fixtures.

The API runs against an in-memory SQLite database: ``get_db`` is overridden
so every request gets a session from the test engine instead of PostgreSQL.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pos_api.database import Base, get_db
from pos_api.main import app


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text(
            "CREATE TABLE tablestat ("
            " table_name VARCHAR(50) PRIMARY KEY,"
            " status VARCHAR(20) NOT NULL,"
            " seats INTEGER NOT NULL)"
        ))
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class BrokenSession:
    """Stands in for a session whose database connection is gone."""

    def __init__(self):
        self.rolled_back = False

    def _fail(self):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    def add(self, instance):
        pass

    async def execute(self, *args, **kwargs):
        self._fail()

    async def get(self, *args, **kwargs):
        self._fail()

    async def flush(self):
        self._fail()

    async def commit(self):
        self._fail()

    async def rollback(self):
        self.rolled_back = True


@pytest.fixture
def broken_session():
    return BrokenSession()


@pytest.fixture
async def broken_client(broken_session):
    async def override_get_db():
        yield broken_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
