"""Procedure parameter naming — request dataclasses bind under camelCase names."""

from dataclasses import fields
from typing import Any

from pydantic.alias_generators import to_camel


def procedure_parameters(request: Any) -> dict[str, Any]:
    """Dataclass → {camelCaseName: value}, in field declaration order."""
    return {to_camel(f.name): getattr(request, f.name) for f in fields(request)}
