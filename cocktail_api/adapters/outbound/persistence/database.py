# cocktail_api/adapters/outbound/persistence/database.py (async version)

import time
import logging
from typing import Any, AsyncGenerator, Dict
from contextlib import asynccontextmanager
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from cocktail_api.adapters.configuration.config import settings
from cocktail_api.adapters.outbound.persistence.models.base_model import Base

# Configure logger
logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 0.5


def build_async_url(url: str) -> str:
    """Swap the sync PostgreSQL driver for asyncpg."""
    return url.replace("postgresql+psycopg2", "postgresql+asyncpg")


def _engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        # Connections are not shared across event loops
        return {"poolclass": NullPool}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", time.time())


def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    total = time.time() - conn.info.pop("query_start_time", time.time())
    if total > SLOW_QUERY_SECONDS:
        logger.warning(f"Slow query ({total:.2f}s): {statement}")


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces ON DELETE CASCADE with this pragma."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


database_url = build_async_url(str(settings.DATABASE_URL))
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")

try:
    # Create async engine
    engine = create_async_engine(
        database_url,
        echo=False,
        future=True,
        **_engine_options(database_url),
    )

    event.listen(engine.sync_engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine.sync_engine, "after_cursor_execute", after_cursor_execute)
    if database_url.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)

    # Create async session factory
    AsyncSessionLocal = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations.

    Work left uncommitted by the caller is committed on a clean exit and
    rolled back when an exception (or a cancellation) escapes the block.

    Example:
        ```python
        async with get_db_context() as db:
            deleted = await credential_store.purge_expired(db)
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency injection for use with FastAPI."""
    async with get_db_context() as session:
        yield session


__all__ = ["Base", "engine", "AsyncSessionLocal", "get_db", "get_db_context", "build_async_url"]
