"""Validation/Coercion Engine — applies a schema to raw untyped input.

Invariants:
    - validate() never raises for bad input: it returns (params, None) or (None, error)
    - A rejection lists EVERY failing field, nested fields as dotted paths (recurrence.startDate)
    - Each failure carries a machine-readable reason from REASONS
    - Unknown input fields are ignored (schemas use extra="ignore")
    - model_fields_set of the result is the "provided" marker: absent fields are not in it,
      explicit nulls are

Design Decisions:
    - Coercion rules live on the schemas (lax ints for query/path, strict ints for bodies);
      this module only runs them and normalizes pydantic's error types
    - coalesce() replaces None only. Present falsy values (0, False, "") are kept
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from taskboard.core.errors import ValidationFailedError

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")

REASONS = (
    "required", "too_short", "too_long", "wrong_format", "out_of_range", "wrong_type",
)

_REASON_BY_TYPE = {
    "missing": "required",
    "string_too_short": "too_short",
    "too_short": "too_short",
    "string_too_long": "too_long",
    "too_long": "too_long",
    "string_pattern_mismatch": "wrong_format",
    "greater_than": "out_of_range",
    "greater_than_equal": "out_of_range",
    "less_than": "out_of_range",
    "less_than_equal": "out_of_range",
}


def _reason(error_type: str) -> str:
    if error_type in _REASON_BY_TYPE:
        return _REASON_BY_TYPE[error_type]
    if error_type.endswith("_type"):
        return "wrong_type"
    return "wrong_format"


def describe_errors(exc: ValidationError) -> list[dict]:
    """Flatten pydantic errors into [{field, reason, message}]."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]) or "body",
            "reason": _reason(e["type"]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]


def validate(
    schema: type[ModelT], raw: Any,
) -> tuple[ModelT, None] | tuple[None, ValidationFailedError]:
    """Apply schema to raw input (query, path or body mapping)."""
    if not isinstance(raw, Mapping):
        return None, ValidationFailedError([{
            "field": "body",
            "reason": "wrong_type",
            "message": "Input should be a JSON object",
        }])
    try:
        return schema.model_validate(dict(raw)), None
    except ValidationError as e:
        return None, ValidationFailedError(describe_errors(e))


def coalesce(value: T | None, default: T) -> T:
    """Default for absent or null values."""
    return default if value is None else value
