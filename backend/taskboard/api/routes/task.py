"""Task Routes — list and create tasks.

Invariants:
    - Every handler gates through CrudController before any procedure call
    - Procedure error 51000 → 400 with the raw message; anything else → opaque 500
"""

from fastapi import APIRouter, Request

from taskboard.api.crud_controller import CrudController
from taskboard.api.responses import success_response
from taskboard.core.domain_types import Securable, Permission, TaskPriority
from taskboard.core.errors import procedure_failure
from taskboard.core.validation import coalesce
from taskboard.schemas.task import TaskCreateBody, TaskListQuery
from taskboard.services.task_rules import task_create, task_list
from taskboard.services.task_types import TaskCreateRequest, TaskListRequest

router = APIRouter(tags=["task"])

SECURABLE = Securable.TASK


@router.post("/task")
async def create_task(request: Request):
    """Create a task. Priority defaults to MEDIUM, description to ''."""
    operation = CrudController([(SECURABLE, Permission.CREATE)])
    validated, error = await operation.create(request, TaskCreateBody)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await task_create(TaskCreateRequest(
            id_account=credential.id_account,
            id_user=credential.id_user,
            title=params.title,
            description=coalesce(params.description, ""),
            due_date=params.due_date,
            priority=coalesce(params.priority, TaskPriority.MEDIUM.value),
            recurrence=params.recurrence,
            reminder_date_time=params.reminder_date_time,
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)


@router.get("/task")
async def list_tasks(request: Request):
    """List the caller's tasks, optionally filtered by status and priority."""
    operation = CrudController([(SECURABLE, Permission.READ)])
    validated, error = await operation.read(request, TaskListQuery)
    if validated is None:
        raise error

    credential, params = validated.credential, validated.params
    try:
        result = await task_list(TaskListRequest(
            id_account=credential.id_account,
            id_user=credential.id_user,
            status=params.status,
            priority=params.priority,
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)
