"""Task operations over an in-memory task list.

Each function validates its input before touching the list, so a call that
raises leaves the list exactly as it was. None of them load or save; the
caller decides when to persist.
"""

from __future__ import annotations

from datetime import datetime

from tasktracker.errors import InvalidArgumentError, InvalidFilterError, NotFoundError
from tasktracker.models import STATUS_TODO, STATUSES, Task, TaskList


def _now() -> datetime:
    """Current local time with its UTC offset."""
    return datetime.now().astimezone()


def find_task(task_list: TaskList, task_id: int) -> Task | None:
    """Get a task by ID."""
    for task in task_list.tasks:
        if task.id == task_id:
            return task
    return None


def _require_task(task_list: TaskList, task_id: int) -> Task:
    task = find_task(task_list, task_id)
    if task is None:
        raise NotFoundError(task_id)
    return task


def add_task(task_list: TaskList, description: str, now: datetime | None = None) -> Task:
    """Append a new todo task and return it.

    The task takes the list's next ID; the counter then moves on, so IDs of
    deleted tasks are never handed out again.
    """
    if not description or not description.strip():
        raise InvalidArgumentError("Description must not be empty")

    now = now or _now()
    task = Task(
        id=task_list.next_id,
        description=description,
        status=STATUS_TODO,
        created_at=now,
        updated_at=now,
    )
    task_list.tasks.append(task)
    task_list.next_id += 1
    return task


def update_task(
    task_list: TaskList, task_id: int, description: str, now: datetime | None = None
) -> Task:
    """Replace a task's description."""
    if not description or not description.strip():
        raise InvalidArgumentError("Description must not be empty")

    task = _require_task(task_list, task_id)
    task.description = description
    task.touch(now or _now())
    return task


def delete_task(task_list: TaskList, task_id: int) -> Task:
    """Remove a task and return it. The next ID is left alone."""
    for index, task in enumerate(task_list.tasks):
        if task.id == task_id:
            return task_list.tasks.pop(index)
    raise NotFoundError(task_id)


def mark_task(
    task_list: TaskList, task_id: int, status: str, now: datetime | None = None
) -> Task:
    """Set a task's status.

    Any status can move to any other; there is no workflow to enforce.
    """
    if status not in STATUSES:
        raise InvalidArgumentError(
            f"Invalid status: {status}. Valid statuses are: {', '.join(STATUSES)}"
        )

    task = _require_task(task_list, task_id)
    task.status = status
    task.touch(now or _now())
    return task


def list_tasks(task_list: TaskList, status_filter: str | None = None) -> list[Task]:
    """Return tasks with the given status, in insertion order.

    No filter (None or "") returns every task.
    """
    if not status_filter:
        return list(task_list.tasks)

    if status_filter not in STATUSES:
        raise InvalidFilterError(status_filter, STATUSES)

    return [task for task in task_list.tasks if task.status == status_filter]
