"""Taskboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskboardError → envelope, anything else → opaque 500
    - CORS configured from settings (not hardcoded)
    - Connection pool configured on startup, created lazily on first request, closed on shutdown
    - /category/reorder router included before /category/{id}

Design Decisions:
    - Lifespan over @app.on_event
    - CredentialMiddleware resolves the caller for every request; CrudController enforces it
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.auth_middleware import CredentialMiddleware
from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import health, task, task_detail, category, category_detail
from taskboard.config import get_settings
from taskboard.infrastructure.database import init_db, close_db
from taskboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.sqlalchemy_url,
        pool_max=settings.database_pool_max,
        idle_timeout_seconds=settings.database_pool_idle_timeout_seconds,
    )
    logger.info("Taskboard API started")
    yield
    await close_db()
    logger.info("Taskboard API shutting down")


app = FastAPI(title="Taskboard API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(CredentialMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(task.router, prefix=settings.api_prefix)
app.include_router(task_detail.router, prefix=settings.api_prefix)
app.include_router(category.router, prefix=settings.api_prefix)
app.include_router(category_detail.router, prefix=settings.api_prefix)

register_error_handlers(app)
