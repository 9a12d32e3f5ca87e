"""Task Service Types — validated, authorized inputs for task procedures."""

from dataclasses import dataclass
from datetime import datetime

from taskboard.core.domain_types import AccountId, UserId, TaskId
from taskboard.schemas.task import TaskRecurrence


@dataclass(frozen=True)
class TaskCreateRequest:
    id_account: AccountId
    id_user: UserId
    title: str
    description: str
    due_date: datetime | None
    priority: int
    recurrence: TaskRecurrence | None
    reminder_date_time: datetime | None


@dataclass(frozen=True)
class TaskListRequest:
    id_account: AccountId
    id_user: UserId
    status: int | None
    priority: int | None


@dataclass(frozen=True)
class TaskGetRequest:
    id_account: AccountId
    id_task: TaskId
