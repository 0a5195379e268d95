"""SQLite database operations for tasks."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Protocol

from ulid import ULID

from ..errors import StoreError, TaskNotFoundError
from ..models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    """Record store capability consumed by the task service."""

    def save(self, task: Task) -> Task: ...

    def find_by_id(self, task_id: str) -> Task | None: ...

    def find_all(self) -> list[Task]: ...

    def find_all_by_status(self, status: TaskStatus) -> list[Task]: ...

    def delete(self, task: Task) -> None: ...


def _to_text(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _row_to_task(row: sqlite3.Row) -> Task:
    due_date = row["due_date"]
    return Task(
        id=row["id"],
        task_name=row["task_name"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        due_date=datetime.fromisoformat(due_date) if due_date else None,
    )


class TaskStore:
    """
    SQLite-backed task store.

    Each operation opens its own connection. Status is stored by name and
    timestamps as ISO-8601 text. Ids are ULIDs assigned on first save.
    """

    def __init__(self, database_path: str | Path):
        self.database_path = Path(database_path)

    def get_connection(self) -> sqlite3.Connection:
        """Get a database connection with WAL mode enabled."""
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextmanager
    def get_db(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        try:
            conn = self.get_connection()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database {self.database_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Database operation failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialize the database schema."""
        with self.get_db() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    task_name TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'PENDING',
                    created_at TEXT NOT NULL,
                    due_date TEXT
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_status
                ON tasks(status)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_created_at
                ON tasks(created_at)
            """)
        logger.info("Task store ready at %s", self.database_path)

    def save(self, task: Task) -> Task:
        """Insert a task without an id, or update the row of one that has it."""
        if task.id is None:
            task = task.model_copy(update={"id": str(ULID())})
            with self.get_db() as conn:
                conn.execute(
                    """
                    INSERT INTO tasks (id, task_name, description, status, created_at, due_date)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        task.id,
                        task.task_name,
                        task.description,
                        task.status.value,
                        _to_text(task.created_at),
                        _to_text(task.due_date),
                    ),
                )
            return task

        with self.get_db() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks
                SET task_name = ?, description = ?, status = ?, due_date = ?
                WHERE id = ?
                """,
                (
                    task.task_name,
                    task.description,
                    task.status.value,
                    _to_text(task.due_date),
                    task.id,
                ),
            )
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task.id)
        return task

    def find_by_id(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        with self.get_db() as conn:
            cursor = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = cursor.fetchone()
            return _row_to_task(row) if row else None

    def find_all(self) -> list[Task]:
        """Get all tasks, newest first."""
        with self.get_db() as conn:
            cursor = conn.execute("SELECT * FROM tasks ORDER BY created_at DESC")
            return [_row_to_task(row) for row in cursor.fetchall()]

    def find_all_by_status(self, status: TaskStatus) -> list[Task]:
        """Get all tasks with the given status, newest first."""
        with self.get_db() as conn:
            cursor = conn.execute(
                "SELECT * FROM tasks WHERE status = ? ORDER BY created_at DESC",
                (status.value,),
            )
            return [_row_to_task(row) for row in cursor.fetchall()]

    def delete(self, task: Task) -> None:
        """Delete a task."""
        with self.get_db() as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task.id,))
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task.id)
