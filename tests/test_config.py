"""Tests for tasktracker.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasktracker.config import CONFIG_FILE, TrackerConfig
from tasktracker.errors import StorageError


class TestTrackerConfig:
    """Tests for TrackerConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = TrackerConfig()
        assert config.tasks_file == "tasks.json"
        assert config.tasks_path == Path("tasks.json")
        assert config.atomic_writes is True
        assert config.log_level == "WARNING"
        assert config.show_timestamps is True

    def test_invalid_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(Exception):
            TrackerConfig(log_level="LOUD")  # type: ignore[arg-type]

    def test_load_missing_file(self, temp_project: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = TrackerConfig.load()
        assert config == TrackerConfig()

    def test_load_default_path(self, temp_project: Path) -> None:
        """Test the default config file lives in the cwd."""
        assert CONFIG_FILE == Path(".task-cli.json")
        (temp_project / ".task-cli.json").write_text(json.dumps({"tasks_file": "todo.json"}))

        config = TrackerConfig.load()

        assert config.tasks_path == Path("todo.json")
        assert config.atomic_writes is True

    def test_load_invalid_json(self, temp_project: Path) -> None:
        """Test a corrupt config file is a parse error."""
        path = temp_project / "config.json"
        path.write_text("{oops")

        with pytest.raises(StorageError) as exc_info:
            TrackerConfig.load(path)

        assert exc_info.value.kind == "parse"

    def test_load_invalid_values(self, temp_project: Path) -> None:
        """Test a config with bad values is a parse error."""
        path = temp_project / "config.json"
        path.write_text(json.dumps({"atomic_writes": "sometimes"}))

        with pytest.raises(StorageError) as exc_info:
            TrackerConfig.load(path)

        assert exc_info.value.kind == "parse"

    def test_save_and_load(self, temp_project: Path) -> None:
        """Test round trip through a file."""
        path = temp_project / "config.json"
        config = TrackerConfig(tasks_file="work.json", atomic_writes=False, log_level="DEBUG")

        config.save(path)

        assert TrackerConfig.load(path) == config

    def test_save_failure_is_write_error(self, temp_project: Path) -> None:
        """Test a config that cannot be written is a write error."""
        path = temp_project / "missing" / "config.json"

        with pytest.raises(StorageError) as exc_info:
            TrackerConfig().save(path)

        assert exc_info.value.kind == "write"
        assert isinstance(exc_info.value.cause, OSError)
