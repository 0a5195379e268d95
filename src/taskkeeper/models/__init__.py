"""Models package."""

from .task import (
    Task,
    TaskCreate,
    TaskIntent,
    TaskListResponse,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    "Task",
    "TaskStatus",
    "TaskIntent",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
]
