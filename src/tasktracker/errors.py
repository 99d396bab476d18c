"""Exceptions raised by task-tracker.

Every failure the core reports derives from TaskTrackerError, so the CLI can
turn any of them into a message and a non-zero exit code in one place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

StorageErrorKind = Literal["read", "parse", "serialize", "write"]

_STORAGE_VERBS: dict[str, str] = {
    "read": "Could not read",
    "parse": "Could not parse",
    "serialize": "Could not serialise data for",
    "write": "Could not write",
}


class TaskTrackerError(Exception):
    """Base class for task-tracker failures."""


class StorageError(TaskTrackerError):
    """The tasks file could not be read, parsed, serialised or written.

    The kind tells the user where to look: permissions for read, a corrupted
    file for parse, disk space or a removed directory for write.
    """

    def __init__(self, kind: StorageErrorKind, path: Path, cause: BaseException) -> None:
        self.kind = kind
        self.path = path
        self.cause = cause
        super().__init__(f"{_STORAGE_VERBS[kind]} {path}: {cause}")


class NotFoundError(TaskTrackerError):
    """No task with the given ID exists."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class InvalidFilterError(TaskTrackerError):
    """A list filter outside the known statuses."""

    def __init__(self, value: str, valid: tuple[str, ...]) -> None:
        self.value = value
        self.valid = valid
        super().__init__(f"Invalid filter: {value}. Valid filters are: {', '.join(valid)}")


class InvalidArgumentError(TaskTrackerError):
    """A command was given a missing or malformed argument."""
