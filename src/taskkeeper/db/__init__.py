"""Database package."""

from .client import TaskRepository, TaskStore

__all__ = [
    "TaskRepository",
    "TaskStore",
]
