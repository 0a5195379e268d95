"""Task lifecycle service: validation, defaults, partial updates and status changes."""

import logging
from datetime import datetime, timezone
from typing import Callable

from ..db import TaskRepository
from ..errors import TaskNotFoundError, TaskValidationError
from ..models import Task, TaskIntent, TaskStatus

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_task_name(task_name: str | None) -> str:
    """Return task_name unchanged, or raise if it is absent or blank."""
    if task_name is None or not task_name.strip():
        raise TaskValidationError("Task name cannot be empty")
    return task_name


def parse_status(raw: str) -> TaskStatus:
    """Parse raw text into a TaskStatus (case-insensitive)."""
    try:
        return TaskStatus(raw.strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise TaskValidationError(f"Invalid status '{raw}'. Expected one of: {allowed}") from None


def merge_task(existing: Task, intent: TaskIntent) -> Task:
    """
    Apply the present fields of intent onto existing and return the result.

    Only task_name, description and due_date can change; id, status and
    created_at are always carried over.
    """
    changes = {}
    if intent.task_name is not None:
        changes["task_name"] = validate_task_name(intent.task_name)
    if intent.description is not None:
        changes["description"] = intent.description
    if intent.due_date is not None:
        changes["due_date"] = intent.due_date
    return existing.model_copy(update=changes)


class TaskService:
    """Single authority for creating, reading, updating and deleting tasks."""

    def __init__(self, store: TaskRepository, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def _require(self, task_id: str) -> Task:
        task = self.store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create_task(self, intent: TaskIntent) -> Task:
        logger.info("Creating new task")
        task = Task(
            task_name=validate_task_name(intent.task_name),
            description=intent.description,
            status=TaskStatus.PENDING,
            created_at=self.clock(),
            due_date=intent.due_date,
        )
        return self.store.save(task)

    def get_task_by_id(self, task_id: str) -> Task:
        logger.info("Getting task by id: %s", task_id)
        return self._require(task_id)

    def get_all_tasks(self) -> list[Task]:
        logger.info("Getting all tasks")
        return list(self.store.find_all())

    def get_tasks_by_status(self, status: TaskStatus) -> list[Task]:
        logger.info("Getting tasks by status: %s", status.value)
        return list(self.store.find_all_by_status(status))

    def update_task(self, task_id: str, intent: TaskIntent) -> Task:
        logger.info("Updating task with id: %s", task_id)
        existing = self._require(task_id)
        return self.store.save(merge_task(existing, intent))

    def update_task_status(self, task_id: str, status: TaskStatus) -> Task:
        logger.info("Updating task status with id: %s to %s", task_id, status.value)
        existing = self._require(task_id)
        return self.store.save(existing.model_copy(update={"status": status}))

    def delete_task(self, task_id: str) -> None:
        logger.info("Deleting task with id: %s", task_id)
        existing = self._require(task_id)
        self.store.delete(existing)
