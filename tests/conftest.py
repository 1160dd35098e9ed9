"""Shared fixtures: a recording stand-in for the asyncpg pool and a test client."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from core import db
from main import app


class FakeTransaction:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn

    async def __aenter__(self):
        self.conn.events.append("begin")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.conn.events.append("rollback" if exc_type else "commit")
        return False


class FakeConnection:
    """Records transaction boundaries; statement results are AsyncMocks."""

    def __init__(self):
        self.events: list[str] = []
        self.fetchrow = AsyncMock(return_value=None)
        self.execute = AsyncMock(return_value="DELETE 1")
        self.executemany = AsyncMock(return_value=None)

    def transaction(self) -> FakeTransaction:
        return FakeTransaction(self)


class FakePool:
    def __init__(self):
        self.conn = FakeConnection()
        self.fetch = AsyncMock(return_value=[])
        self.fetchrow = AsyncMock(return_value=None)
        self.execute = AsyncMock(return_value=None)

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


@pytest.fixture
def pool() -> FakePool:
    return FakePool()


@pytest.fixture
def client(pool: FakePool):
    """Test client without the lifespan; handlers get the fake pool."""
    app.dependency_overrides[db.get_pool] = lambda: pool
    yield TestClient(app)
    app.dependency_overrides.clear()
