"""Domain errors raised by the task lifecycle service and record store."""


class TaskError(Exception):
    """Base class for task errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskError):
    """Malformed or missing required input."""


class TaskNotFoundError(TaskError):
    """The referenced task does not exist."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found with id: {task_id}")
        self.task_id = task_id


class StoreError(TaskError):
    """Persistence-layer failure."""
