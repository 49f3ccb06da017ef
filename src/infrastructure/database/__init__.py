"""
Database Infrastructure
=======================

Manages database connections, session lifecycle, and engine configuration.

Uses SQLAlchemy 2.0 async engines. The ``Database`` object is built once at
startup, stored on ``app.state`` and handed to request handlers through
FastAPI dependencies:

    init (constructed) -> ready (connect() succeeded) -> shutdown (close())
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.core import DatabaseUnavailableException
from src.shared.infrastructure.logging import get_logger, redact_credentials

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    SQLAlchemy 2.0 style using DeclarativeBase.
    All models inherit from this class.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enforcement is switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and session maker.

    Tables are created (if absent) as part of ``connect()``, so a ready
    database always has its schema in place.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        self._url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def engine(self) -> AsyncEngine:
        """
        Get the database engine.

        Raises:
            DatabaseUnavailableException: If connect() has not created it yet
        """
        if self._engine is None:
            raise DatabaseUnavailableException("Database engine not initialized")
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        engine_kwargs = {"echo": self._echo, "pool_pre_ping": True}
        is_sqlite = self._url.startswith("sqlite")
        if not is_sqlite:
            engine_kwargs["pool_size"] = self._pool_size
            engine_kwargs["max_overflow"] = self._max_overflow

        engine = create_async_engine(self._url, **engine_kwargs)
        if is_sqlite:
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    async def connect(self) -> None:
        """
        Open the engine, verify connectivity and create missing tables.

        Raises whatever the driver raises when the database is unreachable.
        """
        if self._engine is None:
            self._engine = self._create_engine()
            self._session_maker = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Prevent lazy loading after commit
                autoflush=False,
            )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self._ready = True

    async def close(self) -> None:
        """Dispose of pooled connections. The database is no longer ready."""
        self._ready = False
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager for database sessions.

        Usage:
            async with database.session() as session:
                result = await session.execute(select(UserModel))

        Yields:
            AsyncSession: SQLAlchemy async session
        """
        if not self._ready or self._session_maker is None:
            raise DatabaseUnavailableException()

        async with self._session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


async def connect_with_retry(
    database: Database,
    max_attempts: int = 10,
    delay_seconds: float = 5.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """
    Connect, retrying a fixed number of times with a fixed delay.

    Every failure is logged with the number of attempts left and followed by
    a ``delay_seconds`` wait.

    Returns:
        int: The attempt number that succeeded

    Raises:
        DatabaseUnavailableException: When all attempts failed
    """
    retries_left = max_attempts
    attempt = 0

    while retries_left:
        attempt += 1
        try:
            await database.connect()
        except Exception as e:
            retries_left -= 1
            logger.error(
                "Error during database initialization",
                extra={
                    "attempt": attempt,
                    "retries_left": retries_left,
                    "error_type": type(e).__name__,
                    "error": redact_credentials(str(e)),
                }
            )
            await sleep(delay_seconds)
            continue

        logger.info("Database has been initialized", extra={"attempt": attempt})
        return attempt

    raise DatabaseUnavailableException(
        "Could not connect to the database",
        {"attempts": attempt}
    )


def get_database(request: Request) -> Database:
    """Get the Database stored on the application by the lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None or not database.is_ready:
        raise DatabaseUnavailableException()
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Async generator for database sessions.

    For use with FastAPI's Depends() - FastAPI handles the lifecycle.

    Usage in FastAPI:
        @app.get("/users")
        async def get_users(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(UserModel))
            return result.scalars().all()

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    database = get_database(request)
    async with database.session() as session:
        yield session
