"""Common Schema Pieces — shared base model and reusable field types.

Invariants:
    - Python field names are snake_case; wire names are camelCase aliases
    - Error locations report the wire (camelCase) name
    - Body integers/booleans are strict; path/query values arrive as text and are coerced

Design Decisions:
    - Annotated aliases (FK, Description, Color) over per-schema Field repetition
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestSchema(BaseModel):
    """Base for all route parameter schemas."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


# Body field types (JSON carries real numbers/booleans, no string coercion)
BodyBool = Annotated[bool, Field(strict=True)]
FK = Annotated[int, Field(strict=True, gt=0)]
Name = Annotated[str, Field(min_length=1, max_length=200)]
Description = Annotated[str, Field(max_length=500)]
Color = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


class IdPath(RequestSchema):
    """`/{id}` path segment, coerced from text."""
    id: int = Field(gt=0)
