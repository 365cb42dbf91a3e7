"""Functional core - pure business logic with no I/O."""

from .projects import LifeArea, Project, ProjectStatus, ProjectTask, filter_active, find_project
from .timelog import TimeLogEntry, TimeType, new_time_log
from .weekly import (
    WeeklyProjectSummary,
    TaskTimeEntry,
    compute_weekly_summaries,
    resolve_project,
    resolve_logs,
    start_of_week,
)
from .sessions import CombinedSession, combine_sessions, day_stats, logs_for_day
from .pomodoro import PomodoroTimer, format_clock
from .dashboard import WeeklyOverview, weekly_time_overview, format_hours, format_minutes
from .strategy import AgendaItem, WeeklySession, StrategyWorksheet, DEFAULT_AGENDA, week_id

__all__ = [
    # Projects
    "LifeArea",
    "Project",
    "ProjectStatus",
    "ProjectTask",
    "filter_active",
    "find_project",
    # Time log
    "TimeLogEntry",
    "TimeType",
    "new_time_log",
    # Weekly aggregation
    "WeeklyProjectSummary",
    "TaskTimeEntry",
    "compute_weekly_summaries",
    "resolve_project",
    "resolve_logs",
    "start_of_week",
    # Sessions
    "CombinedSession",
    "combine_sessions",
    "day_stats",
    "logs_for_day",
    # Pomodoro
    "PomodoroTimer",
    "format_clock",
    # Dashboard
    "WeeklyOverview",
    "weekly_time_overview",
    "format_hours",
    "format_minutes",
    # Strategy
    "AgendaItem",
    "WeeklySession",
    "StrategyWorksheet",
    "DEFAULT_AGENDA",
    "week_id",
]
