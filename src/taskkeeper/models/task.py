"""Pydantic models for tasks."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Task status enumeration. Values are stored and sent by name."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class _CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Domain Record
# =============================================================================


class Task(_CamelModel):
    """A persisted task record. Immutable; changes produce a new copy."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    task_name: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime
    due_date: datetime | None = None


class TaskIntent(_CamelModel):
    """
    Sparse set of task fields describing a requested creation or update.

    A field left as None is absent: updates keep the existing value.
    """

    task_name: str | None = Field(None, max_length=500)
    description: str | None = None
    due_date: datetime | None = None


# =============================================================================
# API Models
# =============================================================================


class TaskCreate(TaskIntent):
    """Request model for creating a task."""


class TaskUpdate(TaskIntent):
    """Request model for updating a task. Every field is optional."""


class TaskResponse(_CamelModel):
    """Response model for a task."""

    id: str
    task_name: str
    description: str | None
    status: TaskStatus
    created_at: datetime
    due_date: datetime | None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.model_dump())


class TaskListResponse(_CamelModel):
    """Response model for task list."""

    tasks: list[TaskResponse]
    count: int

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> "TaskListResponse":
        return cls(tasks=[TaskResponse.from_task(task) for task in tasks], count=len(tasks))
