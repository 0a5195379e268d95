"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .db import TaskRepository, TaskStore
from .errors import StoreError, TaskNotFoundError, TaskValidationError
from .logging_setup import setup_logging
from .routers import tasks
from .services import TaskService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    store = app.state.task_service.store
    if hasattr(store, "init_db"):
        store.init_db()
    yield


def create_app(settings: Settings | None = None, store: TaskRepository | None = None) -> FastAPI:
    """Build the application around a task store (SQLite unless one is given)."""
    settings = settings or get_settings()
    if store is None:
        store = TaskStore(settings.database_path)

    app = FastAPI(
        title="Taskkeeper",
        description="Task lifecycle record-keeper",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_service = TaskService(store)

    app.include_router(tasks.router)
    register_exception_handlers(app)

    @app.get("/health")
    def health():
        """Liveness check."""
        return {"status": "healthy", "service": settings.app_name}

    return app


# =============================================================================
# Error Mapping
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP status codes."""

    @app.exception_handler(TaskValidationError)
    async def handle_validation_error(request: Request, exc: TaskValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message},
        )

    @app.exception_handler(TaskNotFoundError)
    async def handle_not_found(request: Request, exc: TaskNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": exc.message},
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    uvicorn.run(
        "taskkeeper.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
