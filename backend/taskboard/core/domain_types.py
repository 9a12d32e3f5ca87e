"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, UserId, TaskId, CategoryId wrap ints — never bare ints in service signatures
    - All numeric codes stored by the procedures encoded as IntEnums
    - Securable/Permission values match the "SECURABLE:PERMISSION" token claims

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost
    - IntEnum for stored codes: values bind directly as procedure parameters
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)
UserId = NewType("UserId", int)
TaskId = NewType("TaskId", int)
CategoryId = NewType("CategoryId", int)


# ─── Task Enums ──────────────────────────────────────────────────

class TaskStatus(IntEnum):
    PENDING = 0
    IN_PROGRESS = 1
    COMPLETED = 2


class TaskPriority(IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2


class RecurrenceType(IntEnum):
    DAILY = 0
    WEEKLY = 1
    MONTHLY = 2
    YEARLY = 3


# ─── Category Enums ──────────────────────────────────────────────

class CategoryStatus(IntEnum):
    ACTIVE = 0
    ARCHIVED = 1


DEFAULT_CATEGORY_COLOR = "#3498db"


# ─── Authorization ───────────────────────────────────────────────

class Securable(str, Enum):
    """Protected resource categories a permission is checked against."""
    TASK = "TASK"
    CATEGORY = "CATEGORY"


class Permission(str, Enum):
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
