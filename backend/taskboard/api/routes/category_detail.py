"""Category Detail Routes — get, update, delete and archive /category/{id}.

Invariants:
    - The default category cannot be modified, deleted or archived: the procedures raise
      cannotModifyDefaultCategory / cannotDeleteDefaultCategory / cannotArchiveDefaultCategory
      as error 51000, surfaced as 400
    - Archive is idempotent at this layer: archiving an archived category is a plain success
"""

from fastapi import APIRouter, Request

from taskboard.api.crud_controller import CrudController
from taskboard.api.responses import success_response
from taskboard.core.domain_types import CategoryId, Securable, Permission
from taskboard.core.errors import procedure_failure
from taskboard.core.validation import coalesce
from taskboard.schemas.category import (
    CategoryUpdateParams, CategoryDeleteParams, CategoryArchiveParams,
)
from taskboard.schemas.common import IdPath
from taskboard.services.category_rules import (
    category_get, category_update, category_delete, category_archive,
)
from taskboard.services.category_types import (
    CategoryGetRequest,
    CategoryUpdateRequest,
    CategoryDeleteRequest,
    CategoryArchiveRequest,
)

router = APIRouter(tags=["category"])

SECURABLE = Securable.CATEGORY


@router.get("/category/{id}")
async def get_category(request: Request):
    """Category with its subcategories."""
    operation = CrudController([(SECURABLE, Permission.READ)])
    validated, error = await operation.read(request, IdPath)
    if validated is None:
        raise error

    try:
        result = await category_get(CategoryGetRequest(
            id_account=validated.credential.id_account,
            id_category=CategoryId(validated.params.id),
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.put("/category/{id}")
async def update_category(request: Request):
    operation = CrudController([(SECURABLE, Permission.UPDATE)])
    validated, error = await operation.update(request, CategoryUpdateParams)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await category_update(CategoryUpdateRequest(
            id_account=credential.id_account,
            id_category=CategoryId(params.id),
            name=params.name,
            color=params.color,
            description=coalesce(params.description, ""),
            id_category_parent=params.id_category_parent,
            order=params.order,
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.delete("/category/{id}")
async def delete_category(request: Request):
    """Delete a category; its tasks move to idCategoryTarget unless deleteTasks."""
    operation = CrudController([(SECURABLE, Permission.DELETE)])
    validated, error = await operation.delete(request, CategoryDeleteParams)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await category_delete(CategoryDeleteRequest(
            id_account=credential.id_account,
            id_category=CategoryId(params.id),
            id_category_target=params.id_category_target,
            delete_tasks=coalesce(params.delete_tasks, False),
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.patch("/category/{id}/archive")
async def archive_category(request: Request):
    """Archive (archive=true) or unarchive (archive=false) a category."""
    operation = CrudController([(SECURABLE, Permission.UPDATE)])
    validated, error = await operation.update(request, CategoryArchiveParams)
    if validated is None:
        raise error

    try:
        result = await category_archive(CategoryArchiveRequest(
            id_account=validated.credential.id_account,
            id_category=CategoryId(validated.params.id),
            archive=validated.params.archive,
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)
