"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment variables before importing the app
os.environ.setdefault("DEBUG", "true")
os.environ["TMDB_API_KEY"] = ""
os.environ["OMDB_API_KEY"] = ""

from factories import FakeCache

from now_playing.dal.movies import MoviesDAL
from now_playing.database import init_db
from now_playing.main import app


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def cache() -> FakeCache:
    """Fresh in-memory cache."""
    return FakeCache()


@pytest.fixture
async def session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory over a fresh SQLite database file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def dal(session_factory: async_sessionmaker[AsyncSession], cache: FakeCache) -> MoviesDAL:
    """Movies DAL over the test database and fake cache."""
    return MoviesDAL(session_factory, cache, posters_ttl_seconds=86400)
