"""Configuration models for task-tracker."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from tasktracker.errors import StorageError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TrackerConfig(BaseModel):
    """Main configuration for task-tracker."""

    tasks_file: str = "tasks.json"
    atomic_writes: bool = True
    log_level: LogLevel = "WARNING"
    show_timestamps: bool = True

    @property
    def tasks_path(self) -> Path:
        return Path(self.tasks_file)

    @classmethod
    def load(cls, path: Path | None = None) -> TrackerConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        try:
            with open(path) as f:
                data = json.load(f)
            return cls.model_validate(data)
        except FileNotFoundError:
            return cls()
        except OSError as e:
            raise StorageError("read", path, e) from e
        except (ValueError, ValidationError) as e:
            raise StorageError("parse", path, e) from e

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        try:
            with open(path, "w") as f:
                json.dump(self.model_dump(), f, indent=2)
        except OSError as e:
            raise StorageError("write", path, e) from e


CONFIG_FILE = Path(".task-cli.json")
