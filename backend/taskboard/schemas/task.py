"""Task Schemas — parameter contracts for /task routes.

Invariants:
    - status/priority/recurrence type bounded by their domain enums (0–2, 0–2, 0–3)
    - recurrence validates recursively; its failures report as recurrence.<field>
"""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from taskboard.core.domain_types import RecurrenceType, TaskPriority, TaskStatus
from taskboard.schemas.common import RequestSchema, Name, Description

Priority = Annotated[
    int, Field(strict=True, ge=min(TaskPriority).value, le=max(TaskPriority).value),
]


class TaskRecurrence(RequestSchema):
    """Recurrence configuration, stored by the procedure as JSON."""
    type: Annotated[
        int,
        Field(strict=True, ge=min(RecurrenceType).value, le=max(RecurrenceType).value),
    ]
    interval: Annotated[int, Field(strict=True, ge=1)] | None = None
    week_days: Annotated[str, Field(max_length=20)] | None = None
    month_day: Annotated[int, Field(strict=True, ge=1, le=31)] | None = None
    start_date: datetime
    end_date: datetime | None = None
    occurrence_count: Annotated[int, Field(strict=True, ge=1, le=100)] | None = None


class TaskCreateBody(RequestSchema):
    title: Name
    description: Description | None = None
    due_date: datetime | None = None
    priority: Priority | None = None
    recurrence: TaskRecurrence | None = None
    reminder_date_time: datetime | None = None


class TaskListQuery(RequestSchema):
    status: int | None = Field(
        None, ge=min(TaskStatus).value, le=max(TaskStatus).value,
    )
    priority: int | None = Field(
        None, ge=min(TaskPriority).value, le=max(TaskPriority).value,
    )
