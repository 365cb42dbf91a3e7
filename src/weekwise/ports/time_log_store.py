"""Time log repository interface."""

from typing import Protocol

from weekwise.core.timelog import TimeLogEntry


class TimeLogStore(Protocol):
    """Interface for the append-only time log."""

    def list_time_logs(self) -> list[TimeLogEntry]:
        """Load every log entry, oldest first."""
        ...

    def append(self, entry: TimeLogEntry) -> None:
        """Add an entry. Existing entries are never modified."""
        ...
