"""Error Handlers — global exception handlers for the Taskboard API.

Invariants:
    - TaskboardError → its own envelope and http_status
    - Exception (catch-all) → 500 envelope, never leaks internal details

Design Decisions:
    - Extracted from main.py: main only assembles the app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from taskboard.api.responses import error_response
from taskboard.core.errors import TaskboardError, GENERIC_ERROR_MESSAGE

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_taskboard_error_handler(app)
    _register_generic_error_handler(app)


def _register_taskboard_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        """Handle validation, authorization, procedure and general errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
            },
            exc_info=exc.__cause__ if exc.http_status >= 500 else None,
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response(GENERIC_ERROR_MESSAGE, "INTERNAL_ERROR"),
        )
