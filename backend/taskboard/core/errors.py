"""Error Hierarchy — typed, categorized exceptions for all Taskboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the error envelope {success, error, timestamp}
    - Domain errors (400-level) carry client-safe messages; GeneralError never leaks detail
    - SQL Server error 51000 is the only procedure error surfaced to clients verbatim

Design Decisions:
    - Single hierarchy with TaskboardError base: FastAPI global handler catches all
    - sql_error_number() parses pyodbc messages: the driver exposes the number only in text
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Custom RAISERROR/THROW number used by the procedures for business rule violations
PROCEDURE_DOMAIN_ERROR = 51000

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# "[42000] [Microsoft][ODBC Driver 18 for SQL Server][SQL Server]cannotDeleteDefaultCategory (51000) (SQLExecDirectW)"
_ODBC_MESSAGE = re.compile(
    r"(?:\[[^\]]*\]\s*)*(?P<message>.*?)\s*\((?P<number>\d+)\)\s*(?:\(\w+\))?\s*$",
    re.DOTALL,
)


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {
            "success": False,
            "error": error,
            "timestamp": self.timestamp.isoformat(),
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationFailedError(TaskboardError):
    """Input did not satisfy the route schema. details lists every failing field."""
    def __init__(self, details: list[dict]):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, 400, details,
        )

    @property
    def fields(self) -> list[str]:
        return [d["field"] for d in self.details]


class AuthenticationError(TaskboardError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION, 401,
        )


class AuthorizationError(TaskboardError):
    """Credential lacks a declared permission. Never says whether the resource exists."""
    def __init__(self, missing: list[str]):
        super().__init__(
            "Insufficient permissions", "FORBIDDEN",
            ErrorCategory.AUTHORIZATION, 403,
        )
        self.missing = missing


class ProcedureRaisedError(TaskboardError):
    """Business rule raised by a stored procedure (error 51000), message passed through."""
    def __init__(self, message: str):
        super().__init__(message, "ERROR", ErrorCategory.BUSINESS_RULE, 400)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class GeneralError(TaskboardError):
    """Opaque failure surfaced to clients without detail."""
    def __init__(self):
        super().__init__(
            GENERIC_ERROR_MESSAGE, "INTERNAL_ERROR", ErrorCategory.INTERNAL, 500,
        )


# ─── SQL Server error inspection ────────────────────────────────

def _driver_error(exc: BaseException) -> BaseException:
    """Unwrap a SQLAlchemy DBAPIError to the driver exception."""
    return getattr(exc, "orig", None) or exc


def _driver_text(exc: BaseException) -> str:
    err = _driver_error(exc)
    args = getattr(err, "args", ())
    # pyodbc: args = (sqlstate, message)
    if len(args) >= 2 and isinstance(args[1], str):
        return args[1]
    if args and isinstance(args[0], str):
        return args[0]
    return str(err)


def sql_error_number(exc: BaseException) -> int | None:
    """SQL Server error number of a procedure failure, if one can be determined."""
    for candidate in (exc, _driver_error(exc)):
        number = getattr(candidate, "number", None)
        if isinstance(number, int):
            return number
    match = _ODBC_MESSAGE.match(_driver_text(exc))
    if match:
        return int(match.group("number"))
    return None


def sql_error_message(exc: BaseException) -> str:
    """Message raised by the procedure, stripped of driver prefixes and suffixes."""
    err = _driver_error(exc)
    if isinstance(getattr(err, "number", None), int):
        return str(getattr(err, "message", None) or err)
    text = _driver_text(exc)
    match = _ODBC_MESSAGE.match(text)
    if match:
        return match.group("message")
    return text


def procedure_failure(exc: BaseException) -> TaskboardError:
    """Client-facing error for a failed procedure call: 51000 passes through, rest is opaque."""
    if sql_error_number(exc) == PROCEDURE_DOMAIN_ERROR:
        return ProcedureRaisedError(sql_error_message(exc))
    return GeneralError()
