"""Commands and the session that runs them.

A command is a small frozen dataclass, one per operation. ``parse_command``
builds one from positional strings, ``dispatch`` runs one against a task list,
and ``TaskSession`` owns a task list across any number of commands: it loads
the file once, tracks whether anything changed, and saves once at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import assert_never

from tasktracker.errors import InvalidArgumentError
from tasktracker.models import STATUS_DONE, STATUS_IN_PROGRESS, Task, TaskList
from tasktracker.operations import add_task, delete_task, list_tasks, mark_task, update_task
from tasktracker.store import load_tasks, save_tasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddCommand:
    description: str


@dataclass(frozen=True)
class UpdateCommand:
    task_id: int
    description: str


@dataclass(frozen=True)
class DeleteCommand:
    task_id: int


@dataclass(frozen=True)
class MarkCommand:
    task_id: int
    status: str


@dataclass(frozen=True)
class ListCommand:
    status_filter: str | None = None


Command = AddCommand | UpdateCommand | DeleteCommand | MarkCommand | ListCommand


@dataclass
class CommandResult:
    """Outcome of one command."""

    message: str
    dirty: bool = False
    task: Task | None = None
    tasks: list[Task] = field(default_factory=list)


USAGE = """\
Usage:
  add "description"           Add a new task
  update <id> "description"   Update task description
  delete <id>                 Delete a task
  mark-in-progress <id>       Mark task as in progress
  mark-done <id>              Mark task as done
  mark <id> <status>          Set task status (todo, in-progress, done)
  list [status]               List tasks, optionally by status"""


def _parse_id(text: str) -> int:
    try:
        task_id = int(text)
    except ValueError:
        raise InvalidArgumentError(f"Invalid task ID: {text}") from None
    if task_id < 1:
        raise InvalidArgumentError(f"Invalid task ID: {text}")
    return task_id


def _require_args(name: str, args: Sequence[str], count: int, what: str) -> None:
    if len(args) < count:
        raise InvalidArgumentError(f"{what} required for {name} command")


def parse_command(args: Sequence[str]) -> Command:
    """Build a command from a command name and its positional arguments.

    Example:

        parse_command(["update", "3", "Buy oat milk"])
    """
    if not args:
        raise InvalidArgumentError(f"No command given\n{USAGE}")

    name, rest = args[0], list(args[1:])

    if name == "add":
        _require_args(name, rest, 1, "Description is")
        return AddCommand(description=rest[0])
    elif name == "update":
        _require_args(name, rest, 2, "ID and description are")
        return UpdateCommand(task_id=_parse_id(rest[0]), description=rest[1])
    elif name == "delete":
        _require_args(name, rest, 1, "ID is")
        return DeleteCommand(task_id=_parse_id(rest[0]))
    elif name == "mark-in-progress":
        _require_args(name, rest, 1, "ID is")
        return MarkCommand(task_id=_parse_id(rest[0]), status=STATUS_IN_PROGRESS)
    elif name == "mark-done":
        _require_args(name, rest, 1, "ID is")
        return MarkCommand(task_id=_parse_id(rest[0]), status=STATUS_DONE)
    elif name == "mark":
        _require_args(name, rest, 2, "ID and status are")
        return MarkCommand(task_id=_parse_id(rest[0]), status=rest[1])
    elif name == "list":
        return ListCommand(status_filter=rest[0] if rest else None)
    else:
        raise InvalidArgumentError(f"Unknown command '{name}'\n{USAGE}")


def dispatch(task_list: TaskList, command: Command, now: datetime | None = None) -> CommandResult:
    """Run one command against the task list."""
    if isinstance(command, AddCommand):
        task = add_task(task_list, command.description, now=now)
        return CommandResult(f"Task added successfully (ID: {task.id})", dirty=True, task=task)
    elif isinstance(command, UpdateCommand):
        task = update_task(task_list, command.task_id, command.description, now=now)
        return CommandResult(f"Task {task.id} updated successfully", dirty=True, task=task)
    elif isinstance(command, DeleteCommand):
        task = delete_task(task_list, command.task_id)
        return CommandResult(f"Task {task.id} deleted successfully", dirty=True, task=task)
    elif isinstance(command, MarkCommand):
        task = mark_task(task_list, command.task_id, command.status, now=now)
        return CommandResult(f"Task {task.id} marked as {task.status}", dirty=True, task=task)
    elif isinstance(command, ListCommand):
        tasks = list_tasks(task_list, command.status_filter)
        if tasks:
            message = f"{len(tasks)} task(s)"
        elif command.status_filter:
            message = f"No tasks found with status: {command.status_filter}"
        else:
            message = "No tasks found."
        return CommandResult(message, tasks=tasks)
    else:
        assert_never(command)


class TaskSession:
    """Owns one loaded task list and its dirty flag.

    Load happens lazily, at most once. ``commit`` writes the file only when a
    command changed something. Used as a context manager, the session
    commits when the block finishes normally and discards changes when it
    raises.
    """

    def __init__(self, path: Path | None = None, atomic: bool = True) -> None:
        self.path = path
        self.atomic = atomic
        self.dirty = False
        self._task_list: TaskList | None = None

    @property
    def task_list(self) -> TaskList:
        if self._task_list is None:
            self._task_list = load_tasks(self.path)
        return self._task_list

    def execute(self, command: Command, now: datetime | None = None) -> CommandResult:
        result = dispatch(self.task_list, command, now=now)
        self.dirty = self.dirty or result.dirty
        return result

    def commit(self) -> bool:
        """Save if anything changed. Returns whether a write happened."""
        if not self.dirty or self._task_list is None:
            logger.debug("No changes, skipping save")
            return False
        save_tasks(self._task_list, self.path, atomic=self.atomic)
        self.dirty = False
        return True

    def __enter__(self) -> TaskSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()


def run_batch(
    commands: Iterable[Command],
    path: Path | None = None,
    atomic: bool = True,
    now: datetime | None = None,
) -> list[CommandResult]:
    """Run commands against one loaded task list and save once at the end.

    The first failing command stops the batch and nothing is written.
    """
    with TaskSession(path, atomic=atomic) as session:
        return [session.execute(command, now=now) for command in commands]
