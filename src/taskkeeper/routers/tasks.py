"""Task API router."""

from fastapi import APIRouter, Depends, Request, Response, status

from ..models import (
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from ..services import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_task_service(request: Request) -> TaskService:
    """Return the service wired onto the application."""
    return request.app.state.task_service


# =============================================================================
# Collection Endpoints - Must be defined BEFORE /{task_id} routes
# =============================================================================


@router.get("", response_model=TaskListResponse)
def list_tasks(
    status: TaskStatus | None = None,
    service: TaskService = Depends(get_task_service),
):
    """Get all tasks, optionally filtered by status."""
    if status is None:
        tasks = service.get_all_tasks()
    else:
        tasks = service.get_tasks_by_status(status)
    return TaskListResponse.from_tasks(tasks)


@router.get("/filter/status", response_model=TaskListResponse)
def list_tasks_by_status(
    status: TaskStatus,
    service: TaskService = Depends(get_task_service),
):
    """Get tasks with the given status."""
    return TaskListResponse.from_tasks(service.get_tasks_by_status(status))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    task_data: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task."""
    return TaskResponse.from_task(service.create_task(task_data))


# =============================================================================
# Single Task Endpoints
# =============================================================================


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a task by ID."""
    return TaskResponse.from_task(service.get_task_by_id(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
@router.patch("/{task_id}", response_model=TaskResponse)
def update_task_endpoint(
    task_id: str,
    task_data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Update a task's name, description and/or due date."""
    return TaskResponse.from_task(service.update_task(task_id, task_data))


@router.patch("/{task_id}/status", response_model=TaskResponse)
def update_task_status_endpoint(
    task_id: str,
    status: TaskStatus,
    service: TaskService = Depends(get_task_service),
):
    """Set a task's status."""
    return TaskResponse.from_task(service.update_task_status(task_id, status))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_endpoint(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete a task."""
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
