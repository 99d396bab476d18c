"""Shared fixtures for task-tracker tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from tasktracker.models import TaskList

UTC_PLUS_2 = timezone(timedelta(hours=2))


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def now() -> datetime:
    """A fixed, timezone-aware 'now'."""
    return datetime(2025, 1, 10, 10, 0, 0, tzinfo=UTC_PLUS_2)


@pytest.fixture
def later(now: datetime) -> datetime:
    """A fixed time one hour after ``now``."""
    return now + timedelta(hours=1)


@pytest.fixture
def sample_tasks_data() -> dict:
    """Sample tasks file content, in the on-disk camelCase shape."""
    return {
        "tasks": [
            {
                "id": 1,
                "description": "Buy groceries",
                "status": "todo",
                "createdAt": "2025-01-10T10:00:00+02:00",
                "updatedAt": "2025-01-10T10:00:00+02:00",
            },
            {
                "id": 3,
                "description": "Complete project",
                "status": "in-progress",
                "createdAt": "2025-01-10T11:00:00+02:00",
                "updatedAt": "2025-01-10T12:30:00+02:00",
            },
            {
                "id": 4,
                "description": "Write report",
                "status": "done",
                "createdAt": "2025-01-11T09:00:00.123456+02:00",
                "updatedAt": "2025-01-11T17:45:10.5+02:00",
            },
        ],
        "nextId": 5,
    }


@pytest.fixture
def sample_task_list(sample_tasks_data: dict) -> TaskList:
    """The sample tasks as a TaskList."""
    return TaskList.from_dict(sample_tasks_data)


@pytest.fixture
def sample_tasks_file(temp_project: Path, sample_tasks_data: dict) -> Path:
    """Create a sample tasks.json file in the temp project."""
    tasks_path = temp_project / "tasks.json"
    with open(tasks_path, "w") as f:
        json.dump(sample_tasks_data, f, indent=2)
    return tasks_path
