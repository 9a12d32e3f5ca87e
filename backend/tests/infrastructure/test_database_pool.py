"""Connection Pool Manager — lazy creation, memoization and invalidation.

Tests:
    - No engine before first use; the first use creates and memoizes it
    - Concurrent first uses share one engine
    - invalidate(engine) drops only that engine; a replacement survives a stale invalidate
    - A bad configuration fails the caller and caches nothing
    - health_check() reports reachability without raising
    - Raw driver errors are classified through the dialect: connection-level ones discard
      the engine, anything else keeps it
"""

import asyncio
import sqlite3

import pytest

from taskboard.infrastructure.database import DatabasePool, is_pool_fatal
from tests.procedure_stub import connection_lost, procedure_error


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}"


async def test_engine_created_lazily_and_memoized(db_url):
    pool = DatabasePool(db_url)
    assert not pool.is_connected
    first = await pool.get_engine()
    assert pool.is_connected
    assert await pool.get_engine() is first
    await pool.close()
    assert not pool.is_connected


async def test_concurrent_first_use_shares_engine(db_url):
    pool = DatabasePool(db_url)
    engines = await asyncio.gather(*(pool.get_engine() for _ in range(5)))
    assert all(e is engines[0] for e in engines)
    await pool.close()


async def test_pool_sizing_applied(db_url):
    pool = DatabasePool(db_url, pool_max=4, idle_timeout_seconds=30)
    engine = await pool.get_engine()
    assert engine.pool.size() == 4
    # age-based recycling: connections older than the timeout are replaced on checkout
    assert engine.pool._recycle == 30
    await pool.close()


async def test_invalidate_then_reconnect(db_url):
    pool = DatabasePool(db_url)
    first = await pool.get_engine()
    await pool.invalidate(first)
    assert not pool.is_connected
    second = await pool.get_engine()
    assert second is not first
    await pool.close()


async def test_stale_invalidate_keeps_replacement(db_url):
    pool = DatabasePool(db_url)
    first = await pool.get_engine()
    await pool.invalidate(first)
    second = await pool.get_engine()
    await pool.invalidate(first)
    assert pool.is_connected
    assert await pool.get_engine() is second
    await pool.close()


async def test_unconfigured_pool_raises():
    pool = DatabasePool()
    with pytest.raises(RuntimeError):
        await pool.get_engine()
    assert not pool.is_connected


async def test_failed_connect_caches_nothing(tmp_path):
    pool = DatabasePool(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'pool.db'}")
    with pytest.raises(Exception):
        await pool.get_engine()
    assert not pool.is_connected


async def test_health_check(db_url, tmp_path):
    assert await DatabasePool(db_url).health_check() is True
    broken = DatabasePool(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'pool.db'}")
    assert await broken.health_check() is False


def test_pool_fatal_classification():
    assert is_pool_fatal(connection_lost())
    assert not is_pool_fatal(procedure_error("categoryNotFound"))
    assert not is_pool_fatal(ValueError("x"))


async def test_raw_driver_errors_classified_by_dialect(db_url):
    pool = DatabasePool(db_url)
    dialect = (await pool.get_engine()).dialect
    assert is_pool_fatal(sqlite3.OperationalError("disk I/O error"), dialect)
    assert not is_pool_fatal(sqlite3.IntegrityError("UNIQUE constraint failed"), dialect)
    assert not is_pool_fatal(sqlite3.OperationalError("disk I/O error"))
    await pool.close()


async def test_begin_discards_engine_on_raw_driver_error(db_url):
    pool = DatabasePool(db_url)
    with pytest.raises(sqlite3.OperationalError):
        async with pool.begin():
            raise sqlite3.OperationalError("unable to open database file")
    assert not pool.is_connected


async def test_begin_keeps_engine_on_other_errors(db_url):
    pool = DatabasePool(db_url)
    with pytest.raises(ValueError):
        async with pool.begin():
            raise ValueError("not a database failure")
    assert pool.is_connected
    await pool.close()
