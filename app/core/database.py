# DB connections

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import create_engine
from app.core.config import settings
import duckdb

# Async engine for FastAPI
async_engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=20,
    max_overflow=0
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Sync engine for CLI scripts
sync_engine = create_engine(
    settings.database_url_sync,
    echo=settings.debug
)


async def get_db() -> AsyncSession:
    """Dependency for getting async database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def get_duckdb_connection(path: str | None = None, read_only: bool = True):
    """Get DuckDB connection to the analytics copy"""
    return duckdb.connect(path or settings.duckdb_path, read_only=read_only)
