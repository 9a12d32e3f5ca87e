"""Response Envelope — uniform success/error wire format with timestamps.

Invariants:
    - Exactly one of data/error is present, determined by success
    - Success carries metadata.timestamp; error carries a top-level timestamp
    - error.details omitted when empty
"""

from datetime import datetime, timezone
from typing import Any


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def success_response(data: Any, metadata: dict[str, Any] | None = None) -> dict:
    return {
        "success": True,
        "data": data,
        "metadata": {"timestamp": _now(), **(metadata or {})},
    }


def error_response(message: str, code: str = "ERROR", details: Any = None) -> dict:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error, "timestamp": _now()}
