"""
Shared fixtures: in-memory SQLite (sync + async) and DuckDB stores
seeded with users, artists and user_events.
"""

import duckdb
import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.models.engagement import Base
from tests.fixtures import (
    DUCKDB_SCHEMA,
    MIXED_ARTISTS,
    MIXED_EVENTS,
    MIXED_USERS,
    seed_sqlalchemy,
)


@pytest.fixture
def sqlite_engine():
    """Empty in-memory SQLite database with the report tables"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded_sqlite(sqlite_engine):
    with sqlite_engine.begin() as conn:
        seed_sqlalchemy(conn, MIXED_USERS, MIXED_ARTISTS, MIXED_EVENTS)
    return sqlite_engine


@pytest.fixture
def duckdb_conn():
    """Empty in-memory DuckDB database with the report tables"""
    con = duckdb.connect(":memory:")
    for statement in DUCKDB_SCHEMA:
        con.execute(statement)
    yield con
    con.close()


@pytest_asyncio.fixture
async def async_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(seed_sqlalchemy, MIXED_USERS, MIXED_ARTISTS, MIXED_EVENTS)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    session_factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
