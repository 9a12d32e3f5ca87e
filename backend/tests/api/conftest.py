"""API test fixtures — ASGI client over the full app.

Invariants:
    - Requests go through the full app: middleware, routers, error handlers
    - Procedures are stubbed (see root conftest); the pool is a per-test SQLite file

Design Decisions:
    - raise_app_exceptions=False: unhandled errors surface as the 500 envelope
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.config import get_settings
from taskboard.main import app
from tests.tokens import bearer


@pytest.fixture
def api():
    """Prefix for the internal API routes."""
    return get_settings().api_prefix


@pytest.fixture
async def client(procedures):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    return bearer()
