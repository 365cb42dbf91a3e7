"""Pure time-log domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TimeType(str, Enum):
    """How a block of logged time is classified."""

    INVESTED = "invested"
    SPENT = "spent"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp, accepting a trailing 'Z' for UTC."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _text(value, field: str) -> str | None:
    """A stored string field; anything but a string or null is malformed."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string, got {value!r}")
    return value


def _minutes(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class TimeLogEntry:
    """An immutable entry in the append-only time log."""

    id: str
    task: str
    duration: int
    type: TimeType
    timestamp: datetime
    project: str | None = None
    task_id: str | None = None
    project_id: str | None = None

    @property
    def hours(self) -> float:
        return self.duration / 60

    @classmethod
    def from_dict(cls, data: dict) -> "TimeLogEntry":
        """
        Create an entry from its stored form.

        Missing durations become 0. A missing or unparseable timestamp, or a
        non-string task or project, raises ValueError so the store can skip
        the record.
        """
        return cls(
            id=str(data.get("id", "")),
            task=_text(data.get("task"), "task") or "",
            duration=_minutes(data.get("duration")),
            type=TimeType(data.get("type", TimeType.INVESTED.value)),
            timestamp=parse_timestamp(data.get("timestamp", "")),
            project=_text(data.get("project"), "project") or None,
            task_id=str(data["taskId"]) if data.get("taskId") else None,
            project_id=str(data["projectId"]) if data.get("projectId") else None,
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "task": self.task,
            "duration": self.duration,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.project:
            data["project"] = self.project
        if self.task_id:
            data["taskId"] = self.task_id
        if self.project_id:
            data["projectId"] = self.project_id
        return data


def new_time_log(
    task: str,
    duration: int,
    time_type: TimeType | str,
    now: datetime,
    project: str | None = None,
    task_id: str | None = None,
    project_id: str | None = None,
) -> TimeLogEntry:
    """Build a fresh log entry, validating what the user typed."""
    if duration <= 0:
        raise ValueError(f"Duration must be a positive number of minutes, got {duration}")
    try:
        time_type = TimeType(time_type)
    except ValueError:
        raise ValueError(f"Unknown time type: {time_type!r} (expected 'invested' or 'spent')")
    return TimeLogEntry(
        id=uuid.uuid4().hex,
        task=task.strip(),
        duration=duration,
        type=time_type,
        timestamp=now,
        project=project.strip() if project else None,
        task_id=task_id,
        project_id=project_id,
    )
