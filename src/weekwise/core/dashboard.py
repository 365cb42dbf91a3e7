"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .leisure import LeisureActivity, weekly_leisure_hours
from .reading import ReadingEntry, weekly_reading_hours
from .timelog import TimeLogEntry, TimeType
from .weekly import logs_since, start_of_week


@dataclass
class WeeklyOverview:
    """Invested vs spent hours for the week, all sources combined."""

    week_start: datetime
    time_log_invested: float
    time_log_spent: float
    leisure_hours: float
    reading_hours: float

    @property
    def invested(self) -> float:
        return self.time_log_invested + self.leisure_hours + self.reading_hours

    @property
    def spent(self) -> float:
        return self.time_log_spent

    @property
    def invested_ratio(self) -> float:
        """Share of this week's time that was invested, 0 when nothing logged."""
        total = self.invested + self.spent
        return self.invested / total if total else 0.0


def weekly_time_overview(
    logs: list[TimeLogEntry],
    activities: list[LeisureActivity],
    reading: list[ReadingEntry],
    now: datetime,
) -> WeeklyOverview:
    """
    Combine time logs, leisure sessions and reading sessions for this week.

    Leisure and reading always count as invested time. Unlike the per-project
    summaries, every time log counts here, matched to a project or not.
    """
    start = start_of_week(now)
    week_logs = [log for log in logs_since(logs, start) if log.duration > 0]
    invested = sum(log.duration for log in week_logs if log.type == TimeType.INVESTED) / 60
    spent = sum(log.duration for log in week_logs if log.type == TimeType.SPENT) / 60

    return WeeklyOverview(
        week_start=start,
        time_log_invested=invested,
        time_log_spent=spent,
        leisure_hours=weekly_leisure_hours(activities, start),
        reading_hours=weekly_reading_hours(reading, start),
    )


def format_hours(hours: float) -> str:
    """'45m' below an hour, '1.5h' otherwise."""
    if hours < 1:
        return f"{round(hours * 60)}m"
    return f"{hours:.1f}h"


def format_minutes(minutes: int) -> str:
    """'1h 5m' or '45m'."""
    h, m = divmod(int(minutes), 60)
    if h > 0:
        return f"{h}h {m}m"
    return f"{m}m"
