"""Task Services — spTaskCreate / spTaskList / spTaskGet calls.

Invariants:
    - recurrence crosses the procedure boundary as a JSON string (recurrenceJson) or NULL
    - task_get always returns all five keys: singletons default to None, lists to []
"""

from typing import Any

from taskboard.infrastructure.procedure_gateway import db_request, ExpectedReturn
from taskboard.services.parameters import procedure_parameters
from taskboard.services.task_types import (
    TaskCreateRequest, TaskListRequest, TaskGetRequest,
)

TASK_GET_RESULT_SETS = ["task", "attachments", "recurrence", "reminders", "subtasks"]


def encode_recurrence(request: TaskCreateRequest) -> str | None:
    """Wire JSON of the recurrence rule; only fields the caller sent are encoded."""
    if request.recurrence is None:
        return None
    return request.recurrence.model_dump_json(by_alias=True, exclude_unset=True)


async def task_create(request: TaskCreateRequest) -> dict | None:
    """Create a task. Returns {idTask}."""
    parameters = {
        "idAccount": request.id_account,
        "idUser": request.id_user,
        "title": request.title,
        "description": request.description,
        "dueDate": request.due_date,
        "priority": request.priority,
        "recurrenceJson": encode_recurrence(request),
        "reminderDateTime": request.reminder_date_time,
    }
    return await db_request(
        "[functional].[spTaskCreate]", parameters, ExpectedReturn.SINGLE,
    )


async def task_list(request: TaskListRequest) -> list:
    return await db_request(
        "[functional].[spTaskList]",
        procedure_parameters(request),
        ExpectedReturn.MULTI,
    )


async def task_get(request: TaskGetRequest) -> dict[str, Any]:
    """Task details with attachments, recurrence, reminders and subtasks."""
    result = await db_request(
        "[functional].[spTaskGet]",
        procedure_parameters(request),
        ExpectedReturn.MULTI,
        result_set_names=TASK_GET_RESULT_SETS,
    )
    return {
        "task": result["task"][0] if result["task"] else None,
        "attachments": result["attachments"] or [],
        "recurrence": result["recurrence"][0] if result["recurrence"] else None,
        "reminders": result["reminders"] or [],
        "subtasks": result["subtasks"] or [],
    }
