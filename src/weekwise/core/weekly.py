"""Weekly time aggregation - rolls time logs up into per-project totals.

Pure functions - no I/O. The current instant is always injected.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Callable

from .projects import Project
from .timelog import TimeLogEntry, TimeType

logger = logging.getLogger(__name__)


def start_of_week(now: datetime) -> datetime:
    """
    Monday 00:00:00 of the week containing `now`, in `now`'s timezone.

    Naive datetimes are treated as local time.
    """
    # weekday() is 0 for Monday and 6 for Sunday
    monday = now.date() - timedelta(days=now.weekday())
    return datetime.combine(monday, time.min, tzinfo=now.tzinfo)


def align_tz(ts: datetime, reference: datetime) -> datetime:
    """
    Bring `ts` into the same naive/aware world as `reference`.

    A naive `ts` is read in `reference`'s timezone. An aware `ts` against a
    naive reference is converted to system local time.
    """
    if (ts.tzinfo is None) == (reference.tzinfo is None):
        return ts
    if ts.tzinfo is None:
        return ts.replace(tzinfo=reference.tzinfo)
    # Aware log against a naive (local) window
    return ts.astimezone().replace(tzinfo=None)


def logs_since(logs: list[TimeLogEntry], start: datetime) -> list[TimeLogEntry]:
    """Logs with timestamp >= start (inclusive)."""
    return [log for log in logs if align_tz(log.timestamp, start) >= start]


# ============== Project Matching ==============

_PARENTHESIZED = re.compile(r"\(([^)]*)\)")
_BASE_WITH_SUFFIX = re.compile(r"^(.*?)\s*\(([^)]*)\)\s*$")


def _exact_match(log_project: str, name: str) -> bool:
    return log_project == name


def _substring_match(log_project: str, name: str) -> bool:
    a = log_project.strip().lower()
    b = name.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def _suffix_match(log_project: str, name: str) -> bool:
    wanted = log_project.strip().lower()
    return any(inner.strip().lower() == wanted for inner in _PARENTHESIZED.findall(name))


def _base_name_match(log_project: str, name: str) -> bool:
    m = _BASE_WITH_SUFFIX.match(name)
    if not m:
        return False
    return m.group(1).strip().lower() == log_project.strip().lower()


# Tried in order; the first rule with any hit wins.
MATCH_RULES: tuple[Callable[[str, str], bool], ...] = (
    _exact_match,
    _substring_match,
    _suffix_match,
    _base_name_match,
)


def _match_index(project_name: str | None, projects: list[Project]) -> int | None:
    if not project_name or not project_name.strip():
        return None
    for rule in MATCH_RULES:
        for i, p in enumerate(projects):
            if rule(project_name, p.name):
                return i
    return None


def _resolve_index(log: TimeLogEntry, projects: list[Project]) -> int | None:
    if log.project_id:
        for i, p in enumerate(projects):
            if p.id == log.project_id:
                return i
    return _match_index(log.project, projects)


def resolve_project(project_name: str | None, projects: list[Project]) -> Project | None:
    """
    Resolve a free-text project name to one of `projects`.

    Rules, first match wins:
      1. Exact, case-sensitive name
      2. Case-insensitive substring, either direction
      3. Name contains "(X)" and project_name equals X
      4. Name is "Base (X)" and project_name equals Base

    Within a rule, the earliest project in input order wins.
    """
    i = _match_index(project_name, projects)
    return projects[i] if i is not None else None


@dataclass(frozen=True)
class ResolvedLog:
    """A time log bound to a concrete project id."""

    log: TimeLogEntry
    project_id: str


@dataclass
class LogResolution:
    matched: list[ResolvedLog] = field(default_factory=list)
    unmatched: list[TimeLogEntry] = field(default_factory=list)


def resolve_logs(logs: list[TimeLogEntry], projects: list[Project]) -> LogResolution:
    """Split logs into those that resolve to a project and those that don't."""
    result = LogResolution()
    for log in logs:
        i = _resolve_index(log, projects)
        if i is None:
            result.unmatched.append(log)
        else:
            result.matched.append(ResolvedLog(log=log, project_id=projects[i].id))
    return result


# ============== Weekly Summaries ==============


@dataclass
class TaskTimeEntry:
    """Hours logged against one task name under one time type."""

    task_name: str
    duration: float
    type: TimeType


@dataclass
class WeeklyProjectSummary:
    """This week's time for one project. Derived, never persisted."""

    project: Project
    total_hours: float = 0.0
    invested_hours: float = 0.0
    spent_hours: float = 0.0
    task_entries: list[TaskTimeEntry] = field(default_factory=list)

    def add(self, log: TimeLogEntry) -> None:
        hours = log.hours
        self.total_hours += hours
        if log.type == TimeType.INVESTED:
            self.invested_hours += hours
        else:
            self.spent_hours += hours

        for entry in self.task_entries:
            if entry.task_name == log.task and entry.type == log.type:
                entry.duration += hours
                return
        self.task_entries.append(TaskTimeEntry(task_name=log.task, duration=hours, type=log.type))

    def entries_for(self, time_type: TimeType | str) -> list[TaskTimeEntry]:
        time_type = TimeType(time_type)
        return [e for e in self.task_entries if e.type == time_type]

    def to_dict(self) -> dict:
        return {
            "project": self.project.name,
            "projectId": self.project.id,
            "lifeArea": self.project.life_area,
            "totalHours": self.total_hours,
            "investedHours": self.invested_hours,
            "spentHours": self.spent_hours,
            "taskEntries": [
                {"taskName": e.task_name, "duration": e.duration, "type": e.type.value}
                for e in self.task_entries
            ],
        }


def compute_weekly_summaries(
    projects: list[Project],
    logs: list[TimeLogEntry],
    now: datetime,
) -> list[WeeklyProjectSummary]:
    """
    Compute this week's per-project time summary.

    `projects` should already be filtered to active ones. Every project gets a
    summary, even with no logged time. Logs before Monday 00:00, without a
    project, with a non-positive duration, or matching no project are left
    out of the totals.

    Pure function - inputs are not mutated.
    """
    summaries = [WeeklyProjectSummary(project=p) for p in projects]
    week_start = start_of_week(now)

    for log in logs_since(logs, week_start):
        if log.duration <= 0:
            logger.debug(f"Skipping log {log.id!r} with non-positive duration {log.duration}")
            continue
        if not log.project_id and not (log.project and log.project.strip()):
            logger.debug(f"Skipping log {log.id!r} ({log.task!r}) without a project")
            continue
        i = _resolve_index(log, projects)
        if i is None:
            logger.debug(f"No project matches {log.project!r} for log {log.id!r} ({log.task!r})")
            continue
        summaries[i].add(log)

    return summaries


def unmatched_logs(
    projects: list[Project],
    logs: list[TimeLogEntry],
    now: datetime,
) -> list[TimeLogEntry]:
    """This week's logs that compute_weekly_summaries leaves out of every total."""
    week_logs = [log for log in logs_since(logs, start_of_week(now)) if log.duration > 0]
    return resolve_logs(week_logs, projects).unmatched


def week_total(summaries: list[WeeklyProjectSummary]) -> tuple[float, float]:
    """(invested, spent) hours across all summaries."""
    invested = sum(s.invested_hours for s in summaries)
    spent = sum(s.spent_hours for s in summaries)
    return invested, spent
