"""Task Detail Routes — /task/{id}."""

from fastapi import APIRouter, Request

from taskboard.api.crud_controller import CrudController
from taskboard.api.responses import success_response
from taskboard.core.domain_types import Securable, Permission, TaskId
from taskboard.core.errors import procedure_failure
from taskboard.schemas.common import IdPath
from taskboard.services.task_rules import task_get
from taskboard.services.task_types import TaskGetRequest

router = APIRouter(tags=["task"])


@router.get("/task/{id}")
async def get_task(request: Request):
    """Task with attachments, recurrence, reminders and subtasks."""
    operation = CrudController([(Securable.TASK, Permission.READ)])
    validated, error = await operation.read(request, IdPath)
    if validated is None:
        raise error

    try:
        result = await task_get(TaskGetRequest(
            id_account=validated.credential.id_account,
            id_task=TaskId(validated.params.id),
        ))
    except Exception as e:
        raise procedure_failure(e) from e
    return success_response(result)
