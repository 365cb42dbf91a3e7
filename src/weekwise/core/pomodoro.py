"""Pomodoro timer state machine. The clock is always passed in."""

from dataclasses import dataclass
from datetime import datetime

from .timelog import TimeLogEntry, TimeType, new_time_log

DEFAULT_MINUTES = 25
PRESETS = (25, 15, 5)


def format_clock(seconds: int) -> str:
    """Format seconds as MM:SS."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass
class PomodoroTimer:
    """
    A countdown that turns finished or stopped sessions into time logs.

    The timer never reads the wall clock; every transition takes `now`.
    """

    minutes: int = DEFAULT_MINUTES
    project: str = ""
    task: str = ""
    time_type: TimeType = TimeType.INVESTED
    remaining_seconds: int = DEFAULT_MINUTES * 60
    started_at: datetime | None = None

    def __post_init__(self):
        if self.minutes <= 0:
            raise ValueError("Timer length must be a positive number of minutes")
        self.remaining_seconds = self.minutes * 60

    @property
    def is_running(self) -> bool:
        return self.started_at is not None

    def preset(self, minutes: int) -> None:
        """Stop the timer and reset it to a new length."""
        if minutes <= 0:
            raise ValueError("Timer length must be a positive number of minutes")
        self.minutes = minutes
        self.started_at = None
        self.remaining_seconds = minutes * 60

    def start(
        self,
        now: datetime,
        project: str | None = None,
        task: str | None = None,
        time_type: TimeType | str | None = None,
    ) -> None:
        if project is not None:
            self.project = project.strip()
        if task is not None:
            self.task = task.strip()
        if time_type is not None:
            self.time_type = TimeType(time_type)
        if not self.project:
            raise ValueError("Select a project before starting the timer")
        if self.is_running:
            return
        self.started_at = now

    def remaining(self, now: datetime) -> int:
        """Seconds left on the countdown."""
        if self.started_at is None:
            return self.remaining_seconds
        elapsed = int((now - self.started_at).total_seconds())
        return max(self.remaining_seconds - elapsed, 0)

    def pause(self, now: datetime) -> None:
        self.remaining_seconds = self.remaining(now)
        self.started_at = None

    def is_finished(self, now: datetime) -> bool:
        return self.remaining(now) == 0

    def elapsed_minutes(self, now: datetime) -> int:
        return (self.minutes * 60 - self.remaining(now)) // 60

    def _log(self, minutes: int, now: datetime) -> TimeLogEntry:
        return new_time_log(
            task=self.task or self.project,
            duration=minutes,
            time_type=self.time_type,
            now=now,
            project=self.project,
        )

    def stop(self, now: datetime) -> TimeLogEntry | None:
        """Stop and reset. Returns a log for the whole minutes worked, if any."""
        minutes = self.elapsed_minutes(now)
        self.preset(self.minutes)
        if minutes < 1 or not self.project:
            return None
        return self._log(minutes, now)

    def complete(self, now: datetime) -> TimeLogEntry:
        """Log the full session length and reset."""
        if not self.project:
            raise ValueError("Select a project before logging a session")
        entry = self._log(self.minutes, now)
        self.preset(self.minutes)
        return entry
