"""
Noteful API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session, for "no store call" assertions
    ├── db_engine:       In-memory SQLite schema, created and dropped per test
    │   ├── db_session:  AsyncSession on that schema
    │   ├── seeded:      Sample folders/tags/notes, committed
    │   └── test_client: HTTPX AsyncClient talking to the FastAPI app

Sample data (seeded):
    folders: 100 Archive, 101 Drafts
    tags:    1 foo, 2 bar, 3 baz
    notes:   1000 "5 life lessons learned from cats"   folder 100, tags [1, 2]
             1001 "What the government doesn't want you to know about cats"
                                                        folder 101, tags [2]
             1002 "The most boring article about dogs"  no folder, no tags
             1003 "Why Cats Rule"                       folder 100, tags [1, 3]
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any noteful imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["NOTE_TAG_FILTER"] = "row"
os.environ["NOTE_SEARCH_CASE_SENSITIVE"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert

import noteful.models  # noqa: F401
from noteful.database import Base, async_session_factory, engine
from noteful.models.note import Folder, Note, Tag, notes_tags


FOLDERS = [
    {"id": 100, "name": "Archive"},
    {"id": 101, "name": "Drafts"},
]

TAGS = [
    {"id": 1, "name": "foo"},
    {"id": 2, "name": "bar"},
    {"id": 3, "name": "baz"},
]

NOTES = [
    {"id": 1000, "title": "5 life lessons learned from cats", "content": "Lorem ipsum", "folder_id": 100},
    {"id": 1001, "title": "What the government doesn't want you to know about cats", "content": "Posuere", "folder_id": 101},
    {"id": 1002, "title": "The most boring article about dogs", "content": None, "folder_id": None},
    {"id": 1003, "title": "Why Cats Rule", "content": "Dolor sit amet", "folder_id": 100},
]

NOTE_TAGS = [
    {"note_id": 1000, "tag_id": 1},
    {"note_id": 1000, "tag_id": 2},
    {"note_id": 1001, "tag_id": 2},
    {"note_id": 1003, "tag_id": 1},
    {"note_id": 1003, "tag_id": 3},
]


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        await service.create_note(mock_db_session, payload)
        mock_db_session.execute.assert_not_awaited()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.begin = MagicMock()
    session.in_transaction = MagicMock(return_value=False)
    return session


@pytest_asyncio.fixture
async def db_engine():
    """Creates every table on the in-memory database, drops them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_engine):
    """Inserts the sample data in its own session and commits it."""
    async with async_session_factory() as session:
        await session.execute(insert(Folder), FOLDERS)
        await session.execute(insert(Tag), TAGS)
        await session.execute(insert(Note), NOTES)
        await session.execute(insert(notes_tags), NOTE_TAGS)
        await session.commit()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from noteful.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
