"""Task and task list models.

The JSON written to disk uses camelCase keys (createdAt, nextId) so files stay
interchangeable with existing task-cli data. Python code uses the snake_case
attribute names; pydantic aliases handle the translation.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Final

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

STATUS_TODO: Final = "todo"
STATUS_IN_PROGRESS: Final = "in-progress"
STATUS_DONE: Final = "done"

STATUSES: tuple[str, ...] = (STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE)

# Files written by other task-cli builds may carry nanosecond timestamps.
_SUB_MICROSECOND = re.compile(r"(\.\d{6})\d+")


class Task(BaseModel):
    """A single task record."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int = Field(gt=0)
    description: str
    # Kept as a plain string: hand-edited files may hold other values and
    # those are preserved rather than rejected.
    status: str
    created_at: AwareDatetime = Field(alias="createdAt")
    updated_at: AwareDatetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _truncate_to_microseconds(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SUB_MICROSECOND.sub(r"\1", value, count=1)
        return value

    def touch(self, now: datetime) -> None:
        """Record a modification at ``now``, never earlier than creation."""
        self.updated_at = max(now, self.created_at)


class TaskList(BaseModel):
    """The persisted collection: tasks in insertion order plus the ID counter."""

    model_config = ConfigDict(populate_by_name=True)

    tasks: list[Task] = Field(default_factory=list)
    next_id: int = Field(default=1, alias="nextId", gt=0)

    def to_dict(self) -> dict:
        """Convert to the on-disk JSON shape."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> TaskList:
        """Create from the on-disk JSON shape."""
        return cls.model_validate(data)
