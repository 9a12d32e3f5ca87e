"""Category Services — spCategory* procedure calls.

Invariants:
    - Default-category protection, name uniqueness, limits and task moves on delete are
      enforced by the procedures (raised as error 51000)
    - category_reorder sends orderData as a JSON array string (orderJson)
"""

import json
from typing import Any

from taskboard.infrastructure.procedure_gateway import db_request, ExpectedReturn
from taskboard.services.parameters import procedure_parameters
from taskboard.services.category_types import (
    CategoryCreateRequest,
    CategoryListRequest,
    CategoryGetRequest,
    CategoryUpdateRequest,
    CategoryDeleteRequest,
    CategoryArchiveRequest,
    CategoryReorderRequest,
)


async def category_create(request: CategoryCreateRequest) -> dict | None:
    """Create a category. Returns {idCategory}."""
    return await db_request(
        "[functional].[spCategoryCreate]",
        procedure_parameters(request),
        ExpectedReturn.SINGLE,
    )


async def category_list(request: CategoryListRequest) -> list:
    return await db_request(
        "[functional].[spCategoryList]",
        procedure_parameters(request),
        ExpectedReturn.MULTI,
    )


async def category_get(request: CategoryGetRequest) -> dict[str, Any]:
    result = await db_request(
        "[functional].[spCategoryGet]",
        procedure_parameters(request),
        ExpectedReturn.MULTI,
        result_set_names=["category", "subcategories"],
    )
    return {
        "category": result["category"][0] if result["category"] else None,
        "subcategories": result["subcategories"] or [],
    }


async def category_update(request: CategoryUpdateRequest) -> dict | None:
    return await db_request(
        "[functional].[spCategoryUpdate]",
        procedure_parameters(request),
        ExpectedReturn.SINGLE,
    )


async def category_delete(request: CategoryDeleteRequest) -> dict | None:
    """Delete a category, moving its tasks to id_category_target or deleting them."""
    return await db_request(
        "[functional].[spCategoryDelete]",
        procedure_parameters(request),
        ExpectedReturn.SINGLE,
    )


async def category_archive(request: CategoryArchiveRequest) -> dict | None:
    return await db_request(
        "[functional].[spCategoryArchive]",
        procedure_parameters(request),
        ExpectedReturn.SINGLE,
    )


async def category_reorder(request: CategoryReorderRequest) -> dict | None:
    order_json = json.dumps([
        {"idCategory": entry.id_category, "order": entry.order}
        for entry in request.order_data
    ])
    return await db_request(
        "[functional].[spCategoryReorder]",
        {"idAccount": request.id_account, "orderJson": order_json},
        ExpectedReturn.SINGLE,
    )
