"""
Async database engine and session management.

Each request gets its own AsyncSession from `get_db`; sessions are never
shared between concurrent submissions.
"""

from collections.abc import AsyncGenerator

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings
from db.base import Base

logger = structlog.get_logger(__name__)


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    Make SQLite transactions safe for concurrent submissions.

    The driver's implicit transaction handling is switched off and every
    transaction starts with BEGIN IMMEDIATE, which takes the write lock up
    front. Concurrent writers then queue on the busy timeout instead of
    interleaving a read-then-write.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, applying SQLite settings where needed."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS}

    engine = create_async_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, expire_on_commit=False, autoflush=False)


engine = create_db_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session_factory = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Closing the session rolls back anything left uncommitted, including
    when the client disconnects mid-request.
    """
    async with async_session_factory() as session:
        yield session


async def create_tables(bind: AsyncEngine) -> None:
    import models  # noqa: F401  (registers tables on Base.metadata)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db() -> None:
    """Create tables that do not exist yet."""
    await create_tables(engine)
    logger.info("database_initialized", dialect=engine.dialect.name)


async def close_db() -> None:
    await engine.dispose()
    logger.info("database_connections_closed")
