"""Task store - loading and saving the tasks file.

The whole task list is read once and written back in full; there is no
incremental update. A missing or empty file is an empty task list, not an
error. Anything else that goes wrong surfaces as a StorageError whose kind
says whether reading, parsing or writing failed.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from tasktracker.errors import StorageError
from tasktracker.models import TaskList

logger = logging.getLogger(__name__)

TASKS_FILE = Path("tasks.json")


def load_tasks(path: Path | None = None) -> TaskList:
    """Load the task list from disk.

    Args:
        path: Optional path override (defaults to tasks.json in the cwd)

    Returns:
        The parsed task list, or an empty one if the file is missing or empty

    Raises:
        StorageError: If the file cannot be read or does not hold a task list
    """
    if path is None:
        path = TASKS_FILE

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No tasks file at %s, starting empty", path)
        return TaskList()
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError("read", path, e) from e

    if not content:
        logger.debug("Tasks file %s is empty, starting empty", path)
        return TaskList()

    try:
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        task_list = TaskList.from_dict(data)
    except (ValueError, ValidationError) as e:
        raise StorageError("parse", path, e) from e

    logger.debug(
        "Loaded %d tasks from %s (next id %d)", len(task_list.tasks), path, task_list.next_id
    )
    return task_list


def serialize_tasks(task_list: TaskList) -> str:
    """Render the task list in its canonical on-disk form."""
    return json.dumps(task_list.to_dict(), indent=2, ensure_ascii=False) + "\n"


def save_tasks(task_list: TaskList, path: Path | None = None, *, atomic: bool = True) -> None:
    """Save the task list to disk, replacing the previous content.

    Args:
        task_list: The task list to write
        path: Optional path override (defaults to tasks.json in the cwd)
        atomic: Write to a temporary file and rename it over the target, so
            readers never see a half-written file

    Raises:
        StorageError: If serialisation or the write fails
    """
    if path is None:
        path = TASKS_FILE

    try:
        content = serialize_tasks(task_list)
    except (TypeError, ValueError) as e:
        raise StorageError("serialize", path, e) from e

    try:
        if atomic:
            _replace_file(path, content)
        else:
            path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StorageError("write", path, e) from e

    logger.debug("Saved %d tasks to %s", len(task_list.tasks), path)


def _replace_file(path: Path, content: str) -> None:
    """Write content beside path, then rename it into place."""
    mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
