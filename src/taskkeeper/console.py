"""Interactive terminal console for managing tasks."""

import sys
from datetime import datetime
from typing import Callable

from pydantic import ValidationError
from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from .config import get_settings
from .db import TaskStore
from .errors import TaskError, TaskNotFoundError, TaskValidationError
from .logging_setup import setup_logging
from .models import Task, TaskIntent, TaskStatus
from .services import TaskService, parse_status

console = Console()

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}
STATUS_ICONS = {
    TaskStatus.PENDING: "⭕",
    TaskStatus.IN_PROGRESS: "⏳",
    TaskStatus.DONE: "✅",
}

HELP_TEXT = """\
add <name>                 create a task
list [status]              list tasks (PENDING / IN_PROGRESS / DONE)
show <id>                  show one task
status <id> <status>       change a task's status
rename <id> <name>         change a task's name
describe <id> <text>       change a task's description
due <id> <YYYY-MM-DD>      change a task's due date
delete <id>                delete a task
quit                       leave the console

Ids may be shortened to any unique prefix."""

QUIT_COMMANDS = ("quit", "exit", "q")

# =============================================================================
# Display
# =============================================================================


def _format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


def render_task_table(tasks: list[Task]) -> RenderableType:
    """Render tasks as a table, or a placeholder line when there are none."""
    if not tasks:
        return Text("No tasks", style="dim")

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("ID", style="dim", width=8)
    table.add_column("Task", style="bold", min_width=20)
    table.add_column("Status", width=16)
    table.add_column("Due", width=16)

    for task in tasks:
        icon = STATUS_ICONS[task.status]
        label = STATUS_LABELS[task.status]
        table.add_row(task.id[:8], escape(task.task_name), f"{icon} {label}", _format_time(task.due_date))
    return table


def render_task_detail(task: Task) -> RenderableType:
    lines = [
        f"[bold]{escape(task.task_name)}[/bold]",
        escape(task.description) if task.description else "[dim]no description[/dim]",
        "",
        f"Status:  {STATUS_ICONS[task.status]} {STATUS_LABELS[task.status]}",
        f"Created: {_format_time(task.created_at)}",
        f"Due:     {_format_time(task.due_date)}",
    ]
    return Panel("\n".join(lines), title=task.id, title_align="left", border_style="blue", padding=(0, 1))


# =============================================================================
# Commands
# =============================================================================


def resolve_task_id(service: TaskService, query: str) -> str:
    """Expand an id prefix into a full task id."""
    query = query.strip().upper()
    if not query:
        raise TaskValidationError("Specify a task id")

    matches = [t.id for t in service.get_all_tasks() if t.id.upper().startswith(query)]
    if not matches:
        raise TaskNotFoundError(query)
    if len(matches) > 1:
        raise TaskValidationError(f"Id prefix '{query}' matches {len(matches)} tasks")
    return matches[0]


def _split_id(args: str) -> tuple[str, str]:
    parts = args.split(maxsplit=1)
    if len(parts) < 2:
        raise TaskValidationError("Expected: <id> <value>")
    return parts[0], parts[1]


def _parse_date(raw: str) -> datetime:
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        raise TaskValidationError(f"Invalid date '{raw}'. Expected YYYY-MM-DD") from None


def cmd_add(service: TaskService, args: str) -> RenderableType:
    task = service.create_task(TaskIntent(task_name=args))
    return Text(f"Added: {task.task_name} ({task.id[:8]})", style="green")


def cmd_list(service: TaskService, args: str) -> RenderableType:
    if args.strip():
        return render_task_table(service.get_tasks_by_status(parse_status(args)))
    return render_task_table(service.get_all_tasks())


def cmd_show(service: TaskService, args: str) -> RenderableType:
    return render_task_detail(service.get_task_by_id(resolve_task_id(service, args)))


def cmd_status(service: TaskService, args: str) -> RenderableType:
    query, raw_status = _split_id(args)
    task = service.update_task_status(resolve_task_id(service, query), parse_status(raw_status))
    return Text(f"{task.task_name}: {STATUS_ICONS[task.status]} {STATUS_LABELS[task.status]}", style="green")


def cmd_rename(service: TaskService, args: str) -> RenderableType:
    query, name = _split_id(args)
    task = service.update_task(resolve_task_id(service, query), TaskIntent(task_name=name))
    return Text(f"Renamed: {task.task_name}", style="green")


def cmd_describe(service: TaskService, args: str) -> RenderableType:
    query, description = _split_id(args)
    task = service.update_task(resolve_task_id(service, query), TaskIntent(description=description))
    return Text(f"Updated description: {task.task_name}", style="green")


def cmd_due(service: TaskService, args: str) -> RenderableType:
    query, raw_date = _split_id(args)
    task = service.update_task(resolve_task_id(service, query), TaskIntent(due_date=_parse_date(raw_date)))
    return Text(f"{task.task_name}: due {_format_time(task.due_date)}", style="green")


def cmd_delete(service: TaskService, args: str) -> RenderableType:
    task_id = resolve_task_id(service, args)
    task = service.get_task_by_id(task_id)
    service.delete_task(task_id)
    return Text(f"Deleted: {task.task_name}", style="green")


def cmd_help(service: TaskService, args: str) -> RenderableType:
    return Text(HELP_TEXT)


COMMANDS: dict[str, Callable[[TaskService, str], RenderableType]] = {
    "add": cmd_add,
    "list": cmd_list,
    "show": cmd_show,
    "status": cmd_status,
    "rename": cmd_rename,
    "describe": cmd_describe,
    "due": cmd_due,
    "delete": cmd_delete,
    "help": cmd_help,
}


def handle_command(service: TaskService, line: str) -> RenderableType | None:
    """Run one console command and return what should be printed."""
    line = line.strip()
    if not line:
        return None

    name, _, args = line.partition(" ")
    command = COMMANDS.get(name.lower())
    if command is None:
        return Text(f"Unknown command '{name}'. Type 'help' for a list of commands.", style="yellow")

    try:
        return command(service, args.strip())
    except TaskError as e:
        return Text(f"Error: {e.message}", style="red")
    except ValidationError as e:
        return Text(f"Error: {e.errors()[0]['msg']}", style="red")


# =============================================================================
# Main
# =============================================================================


def interactive_mode(service: TaskService) -> None:
    console.print(
        Panel(
            "Task console\nType 'help' for commands.\n[dim]Quit: quit[/dim]",
            border_style="cyan",
            padding=(0, 2),
        )
    )

    while True:
        console.print()
        user_input = Prompt.ask("[bold cyan]tasks[/bold cyan]").strip()

        if user_input.lower() in QUIT_COMMANDS:
            console.print("[green]Bye.[/green]")
            break

        result = handle_command(service, user_input)
        if result is not None:
            console.print(result)


def main() -> None:
    settings = get_settings()
    setup_logging("WARNING", settings.log_dir)
    store = TaskStore(settings.database_path)
    try:
        store.init_db()
        interactive_mode(TaskService(store))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
    except Exception as e:
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
