"""Connection Pool Manager — one lazily created, self-healing async engine per process.

Invariants:
    - db_pool is the single process-wide pool; the engine is created on first use and memoized
    - Engine creation and invalidation are serialized by an asyncio.Lock
    - invalidate(engine) only discards the engine that failed, never a fresh replacement
    - A connection-level failure discards the engine, whether it arrives wrapped by SQLAlchemy
      or raw from the driver cursor; the next request reconnects once.
      No retry count, no backoff, no background health probing
    - Pool bounded at pool_max connections. Idle connections stay pooled (up to pool_max)
      and are replaced on checkout once older than idle_timeout_seconds (age, not idle time)

Design Decisions:
    - SQLAlchemy AsyncEngine over a hand-rolled pool (aioodbc driver for SQL Server)
    - First checkout runs SELECT 1 so a bad configuration fails the request that created it
      and leaves nothing cached
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import URL, Dialect
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

logger = logging.getLogger(__name__)


def is_pool_fatal(exc: BaseException, dialect: Dialect | None = None) -> bool:
    """Connection-level failure: the pooled connections can no longer be trusted.

    SQLAlchemy-wrapped errors are classified by type. Raw driver errors (raised by
    the procedure cursor) need the dialect: its DBAPI error classes and is_disconnect().
    """
    if isinstance(exc, DBAPIError):
        return exc.connection_invalidated or isinstance(
            exc, (OperationalError, InterfaceError),
        )
    if dialect is None:
        return False
    dbapi = dialect.loaded_dbapi
    fatal = tuple(
        getattr(dbapi, name) for name in ("OperationalError", "InterfaceError")
        if hasattr(dbapi, name)
    )
    if fatal and isinstance(exc, fatal):
        return True
    error = getattr(dbapi, "Error", None)
    return (
        error is not None and isinstance(exc, error)
        and dialect.is_disconnect(exc, None, None)
    )


class DatabasePool:
    """Lazily created AsyncEngine with invalidate-on-error."""

    def __init__(
        self,
        url: str | URL | None = None,
        pool_max: int = 10,
        idle_timeout_seconds: int = 30,
    ):
        self._url = url
        self._pool_max = pool_max
        self._idle_timeout_seconds = idle_timeout_seconds
        self._engine: AsyncEngine | None = None
        self._lock = asyncio.Lock()

    def configure(
        self, url: str | URL, pool_max: int = 10, idle_timeout_seconds: int = 30,
    ) -> None:
        """Set connection parameters. Takes effect on the next engine creation."""
        self._url = url
        self._pool_max = pool_max
        self._idle_timeout_seconds = idle_timeout_seconds

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def get_engine(self) -> AsyncEngine:
        engine = self._engine
        if engine is not None:
            return engine
        async with self._lock:
            if self._engine is None:
                self._engine = await self._connect()
            return self._engine

    async def _connect(self) -> AsyncEngine:
        if self._url is None:
            raise RuntimeError("Database not initialized")
        engine = create_async_engine(
            self._url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=self._pool_max,
            max_overflow=0,
            pool_recycle=self._idle_timeout_seconds,
            pool_pre_ping=True,
        )
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            raise
        logger.info("Database connection pool established")
        return engine

    @asynccontextmanager
    async def begin(self) -> AsyncGenerator[AsyncConnection, None]:
        """Pooled connection inside a transaction: commit on success, rollback on error."""
        engine = await self.get_engine()
        try:
            async with engine.begin() as conn:
                yield conn
        except Exception as e:
            if is_pool_fatal(e, engine.dialect):
                await self.invalidate(engine)
            raise

    async def invalidate(self, engine: AsyncEngine | None = None) -> None:
        """Discard the cached engine (or only `engine`, if it is still the cached one)."""
        async with self._lock:
            stale = self._engine
            if stale is None or (engine is not None and stale is not engine):
                return
            self._engine = None
        logger.error("Database pool error, discarding pool")
        await stale.dispose()

    async def close(self) -> None:
        async with self._lock:
            stale, self._engine = self._engine, None
        if stale is not None:
            await stale.dispose()
            logger.info("Database connection pool closed")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.begin() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False


# Singleton (configured on startup)
db_pool = DatabasePool()


def init_db(url: str | URL, **kwargs) -> None:
    db_pool.configure(url, **kwargs)


async def close_db() -> None:
    await db_pool.close()
