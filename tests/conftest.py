"""Shared fixtures and utilities for tests."""

import os

# Settings are read at import time, so the environment is prepared first
os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_HOST", "localhost")
os.environ.setdefault("JSON_LOGS", "false")

from contextlib import asynccontextmanager
from typing import Any, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import database.models  # noqa: F401
from api.dependencies import get_message_bus, get_optional_message_bus
from api.main import app
from database.engine import Base, get_db


class RecordingBus:
    """
    In-memory stand-in for ``MessageBus``.

    ``send`` answers from ``replies`` (default ``True``; an exception instance
    is raised instead) and records every request; ``emit`` records events.
    """

    def __init__(self, replies: dict[str, Any] | None = None):
        self.replies = dict(replies or {})
        self.sent: list[tuple[str, Any]] = []
        self.emitted: list[tuple[str, Any]] = []

    async def send(self, pattern: str, data: Any, timeout: float | None = None) -> Any:
        self.sent.append((pattern, data))
        reply = self.replies.get(pattern, True)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def emit(self, pattern: str, data: Any) -> None:
        self.emitted.append((pattern, data))

    def events(self, pattern: str) -> list[Any]:
        return [data for emitted, data in self.emitted if emitted == pattern]


async def _create_engine(url: str, **kwargs):
    engine = create_async_engine(url, **kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = await _create_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """
    File-backed database with one connection per session.

    The in-memory engine shares a single connection, so requests that commit
    concurrently need this one.
    """
    engine = await _create_engine(f"sqlite+aiosqlite:///{tmp_path / 'interviews.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def bus():
    return RecordingBus()


@asynccontextmanager
async def app_client(session_factory, bus: Optional[RecordingBus]):
    """
    HTTP client against the app with the given database and bus injected.

    With ``bus=None`` the app behaves as if no message bus was attached.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    if bus is not None:
        app.dependency_overrides[get_message_bus] = lambda: bus
    app.dependency_overrides[get_optional_message_bus] = lambda: bus
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(session_factory, bus):
    async with app_client(session_factory, bus) as client:
        yield client


@pytest.fixture
async def client_without_bus(session_factory):
    async with app_client(session_factory, None) as client:
        yield client


@pytest.fixture
async def file_client(file_engine, bus):
    """Client whose requests each get their own database connection."""
    factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
    async with app_client(factory, bus) as client:
        yield client


@pytest.fixture
def config_data():
    return {
        "enterprise_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c01",
        "job_role_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c02",
        "seniority_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c03",
        "duration_minutes": 60,
        "num_questions": 10,
        "complexity_level": 3,
        "validity_hours": 24,
    }


@pytest.fixture
def question_data():
    return {
        "job_role_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c02",
        "seniority_id": "6f1c2a4e-8f7b-4d2a-9c1e-3b5d7f9a1c03",
        "question_text": "Explain how a hash map handles collisions.",
        "expected_answer": "Chaining or open addressing.",
        "complexity_level": 2,
    }
