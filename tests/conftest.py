"""
Shared fixtures: a TestClient wired to an in-memory fake session so the
HTTP layer can be exercised without a database.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app
from services.auth import create_token
from services.db import get_session


class FakeResult:
    def __init__(self, rows: list):
        self._rows = rows

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)


class FakeSession:
    """Just enough of AsyncSession for the routers."""

    def __init__(self):
        self.added: list = []
        self.rows: list = []        # what the next execute() returns
        self.statements: list = []

    def add(self, obj) -> None:
        self.added.append(obj)

    async def commit(self) -> None:
        now = datetime.now(timezone.utc)
        for i, obj in enumerate(self.added, start=1):
            if getattr(obj, "id", None) is None:
                obj.id = i
            for col in ("created_at", "updated_at", "recorded_at"):
                if hasattr(type(obj), col) and getattr(obj, col, None) is None:
                    setattr(obj, col, now)

    async def execute(self, stmt):
        self.statements.append(stmt)
        return FakeResult(self.rows)


@pytest.fixture
def fake_db():
    session = FakeSession()

    async def _override():
        yield session

    app.dependency_overrides[get_session] = _override
    yield session
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def client(fake_db) -> TestClient:
    return TestClient(app)


@pytest.fixture
def authed(client) -> TestClient:
    client.cookies.set(settings.session_cookie, create_token(42))
    return client
