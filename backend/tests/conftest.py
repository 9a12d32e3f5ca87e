"""Root conftest — shared test configuration.

Invariants:
    - Environment is set before any taskboard module caches its settings
    - `pool` is a fresh DatabasePool on a per-test SQLite file, swapped in for db_pool
    - `procedures` replaces the gateway's _execute: nothing reaches a real SQL Server

Design Decisions:
    - SQLite file over :memory: (StaticPool rejects pool sizing arguments)
    - Fresh pool per test: its asyncio.Lock binds to the test's event loop
"""

import os

import pytest

# Ensure tests never sign or verify with a real secret
os.environ.setdefault("JWT_SECRET", "test-secret-0123456789abcdef0123456789")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")

import taskboard.infrastructure.database as db_module  # noqa: E402
from taskboard.infrastructure.database import DatabasePool  # noqa: E402
from tests.procedure_stub import ProcedureStub  # noqa: E402


@pytest.fixture
async def pool(tmp_path):
    original_pool = db_module.db_pool
    test_pool = DatabasePool(f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}")
    db_module.db_pool = test_pool
    yield test_pool
    await test_pool.close()
    db_module.db_pool = original_pool


@pytest.fixture
def procedures(pool, monkeypatch):
    """Replace procedure execution with a recording fake.

    Configure with stub.results[routine] = [recordset, ...] | Exception | callable.
    """
    stub = ProcedureStub()
    monkeypatch.setattr(
        "taskboard.infrastructure.procedure_gateway._execute", stub.execute,
    )
    return stub
