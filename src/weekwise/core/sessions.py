"""Today's pomodoro sessions - grouping and daily stats."""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from .timelog import TimeLogEntry, TimeType


@dataclass
class CombinedSession:
    """Repeated sessions of one task under one time type."""

    task: str
    type: TimeType
    total_minutes: int
    count: int
    project: str | None = None


@dataclass
class DayStats:
    total_minutes: int = 0
    invested_minutes: int = 0
    spent_minutes: int = 0


def _local_date(ts: datetime, tz: tzinfo | None) -> date:
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(tz).date()


def logs_for_day(logs: list[TimeLogEntry], day: date, tz: tzinfo | None = None) -> list[TimeLogEntry]:
    """
    Filter logs to those whose timestamp falls on `day`.

    Aware timestamps are converted to `tz` first (system local time when
    `tz` is None), so a UTC log from late evening lands on the local day.
    """
    return [log for log in logs if _local_date(log.timestamp, tz) == day]


def combine_sessions(logs: list[TimeLogEntry]) -> list[CombinedSession]:
    """
    Group logs by (task, type), longest first.

    The project is kept only while every grouped log agrees on it. Sessions
    are combined across projects.
    """
    combined: dict[tuple[str, TimeType], CombinedSession] = {}
    for log in logs:
        key = (log.task, log.type)
        existing = combined.get(key)
        if existing is None:
            combined[key] = CombinedSession(
                task=log.task,
                type=log.type,
                total_minutes=log.duration,
                count=1,
                project=log.project,
            )
            continue
        existing.total_minutes += log.duration
        existing.count += 1
        if existing.project != log.project:
            existing.project = None

    return sorted(combined.values(), key=lambda s: s.total_minutes, reverse=True)


def day_stats(logs: list[TimeLogEntry]) -> DayStats:
    stats = DayStats()
    for log in logs:
        stats.total_minutes += log.duration
        if log.type == TimeType.INVESTED:
            stats.invested_minutes += log.duration
        else:
            stats.spent_minutes += log.duration
    return stats
