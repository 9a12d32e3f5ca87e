"""Category Schemas — parameter contracts for /category routes.

Invariants:
    - name 2–50 chars, color #RRGGBB, order positive
    - Detail schemas extend IdPath: path id and body validated together
"""

from typing import Annotated

from pydantic import Field

from taskboard.core.domain_types import CategoryStatus
from taskboard.schemas.common import (
    RequestSchema, IdPath, BodyBool, FK, Description, Color,
)

CategoryName = Annotated[str, Field(min_length=2, max_length=50)]
Order = Annotated[int, Field(strict=True, gt=0)]


class CategoryCreateBody(RequestSchema):
    name: CategoryName
    color: Color | None = None
    description: Description | None = None
    id_category_parent: FK | None = None


class CategoryListQuery(RequestSchema):
    status: int | None = Field(
        None, ge=min(CategoryStatus).value, le=max(CategoryStatus).value,
    )
    include_archived: bool | None = None


class CategoryUpdateParams(IdPath):
    name: CategoryName
    color: Color
    description: Description | None = None
    id_category_parent: FK | None = None
    order: Order


class CategoryDeleteParams(IdPath):
    id_category_target: FK | None = None
    delete_tasks: BodyBool | None = None


class CategoryArchiveParams(IdPath):
    archive: BodyBool


class CategoryOrderEntry(RequestSchema):
    id_category: FK
    order: Order


class CategoryReorderBody(RequestSchema):
    order_data: list[CategoryOrderEntry] = Field(min_length=1)
