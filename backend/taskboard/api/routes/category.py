"""Category Routes — list, create and reorder categories.

Invariants:
    - /category/reorder is registered before /category/{id} (router included first in main)
    - Procedure error 51000 → 400 with the raw message (categoryNameAlreadyExists,
      categoryLimitReached, ...); anything else → opaque 500
"""

from fastapi import APIRouter, Request

from taskboard.api.crud_controller import CrudController
from taskboard.api.responses import success_response
from taskboard.core.domain_types import (
    CategoryId, Securable, Permission, DEFAULT_CATEGORY_COLOR,
)
from taskboard.core.errors import procedure_failure
from taskboard.core.validation import coalesce
from taskboard.schemas.category import (
    CategoryCreateBody, CategoryListQuery, CategoryReorderBody,
)
from taskboard.services.category_rules import (
    category_create, category_list, category_reorder,
)
from taskboard.services.category_types import (
    CategoryCreateRequest, CategoryListRequest, CategoryReorderRequest, CategoryOrder,
)

router = APIRouter(tags=["category"])

SECURABLE = Securable.CATEGORY


@router.post("/category")
async def create_category(request: Request):
    operation = CrudController([(SECURABLE, Permission.CREATE)])
    validated, error = await operation.create(request, CategoryCreateBody)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await category_create(CategoryCreateRequest(
            id_account=credential.id_account,
            id_user=credential.id_user,
            name=params.name,
            color=coalesce(params.color, DEFAULT_CATEGORY_COLOR),
            description=coalesce(params.description, ""),
            id_category_parent=params.id_category_parent,
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.get("/category")
async def list_categories(request: Request):
    """List the caller's categories; archived ones only with includeArchived."""
    operation = CrudController([(SECURABLE, Permission.READ)])
    validated, error = await operation.read(request, CategoryListQuery)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await category_list(CategoryListRequest(
            id_account=credential.id_account,
            id_user=credential.id_user,
            status=params.status,
            include_archived=coalesce(params.include_archived, False),
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.put("/category/reorder")
async def reorder_categories(request: Request):
    """Set display order for several categories in one call."""
    operation = CrudController([(SECURABLE, Permission.UPDATE)])
    validated, error = await operation.update(request, CategoryReorderBody)
    if validated is None:
        raise error

    try:
        result = await category_reorder(CategoryReorderRequest(
            id_account=validated.credential.id_account,
            order_data=[
                CategoryOrder(CategoryId(entry.id_category), entry.order)
                for entry in validated.params.order_data
            ],
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)
