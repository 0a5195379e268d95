"""Services package."""

from .task_service import TaskService, merge_task, parse_status, validate_task_name

__all__ = [
    "TaskService",
    "merge_task",
    "parse_status",
    "validate_task_name",
]
