"""Shared workflow layer between the CLI and the stores.

Each function loads what it needs from the stores, runs the pure core logic,
saves any changes, and returns the result for display.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .adapters.file_stores import (
    FileLeisureStore,
    FileMemoStore,
    FileProjectStore,
    FileReadingStore,
    FileStrategyStore,
    FileTimeLogStore,
)
from .config import Config
from .core.dashboard import WeeklyOverview, weekly_time_overview
from .core.leisure import ActivitySession, LeisureActivity
from .core.memos import VoiceMemo
from .core.projects import Project, ProjectStatus, ProjectTask, filter_active, find_project
from .core.reading import ReadingEntry, ReadingSession
from .core.sessions import CombinedSession, DayStats, combine_sessions, day_stats, logs_for_day
from .core.strategy import (
    AgendaItem,
    StrategyWorksheet,
    WeeklySession,
    current_session,
    days_until_next_session,
    is_session_due,
    next_session_date,
)
from .core.timelog import TimeLogEntry, TimeType, new_time_log
from .core.weekly import (
    WeeklyProjectSummary,
    compute_weekly_summaries,
    resolve_project,
    start_of_week,
    unmatched_logs,
)
from .ports import LeisureStore, MemoStore, ProjectStore, ReadingStore, StrategyStore, TimeLogStore

logger = logging.getLogger(__name__)


class ProjectNotFoundError(LookupError):
    """Raised when a project reference matches nothing."""

    pass


@dataclass
class Stores:
    projects: ProjectStore
    time_logs: TimeLogStore
    reading: ReadingStore
    leisure: LeisureStore
    memos: MemoStore
    strategy: StrategyStore


def get_stores(config: Config) -> Stores:
    """Build the file-backed stores under the configured data directory."""
    data = config.data_path
    return Stores(
        projects=FileProjectStore(data),
        time_logs=FileTimeLogStore(data),
        reading=FileReadingStore(data),
        leisure=FileLeisureStore(data),
        memos=FileMemoStore(data),
        strategy=FileStrategyStore(data, default_day=config.strategy_day),
    )


def current_time(config: Config) -> datetime:
    """Now, in the configured timezone or local time."""
    if config.timezone:
        return datetime.now(ZoneInfo(config.timezone))
    return datetime.now()


def _new_id() -> str:
    return uuid.uuid4().hex


# ============== Projects ==============


def _require_project(projects: list[Project], ref: str) -> Project:
    project = find_project(projects, ref)
    if project is None:
        raise ProjectNotFoundError(f"No project named '{ref}'")
    return project


def add_project(
    stores: Stores,
    name: str,
    life_area: str,
    status: str = ProjectStatus.ACTIVE.value,
    description: str = "",
) -> Project:
    name = name.strip()
    if not name:
        raise ValueError("Project name must not be empty")
    status = ProjectStatus(status).value

    projects = stores.projects.list_projects()
    clash = [p for p in filter_active(projects) if p.name.strip().lower() == name.lower()]
    if clash:
        # Time logs join on name, so this makes matching ambiguous
        logger.warning(f"An active project named '{clash[0].name}' already exists")

    project = Project(id=_new_id(), name=name, life_area=life_area, status=status, description=description)
    projects.append(project)
    stores.projects.save_projects(projects)
    return project


def add_task(stores: Stores, project_ref: str, name: str, estimated_hours: float = 0.0) -> ProjectTask:
    projects = stores.projects.list_projects()
    project = _require_project(projects, project_ref)
    task = project.add_task(_new_id(), name, estimated_hours)
    stores.projects.save_projects(projects)
    return task


def complete_task(stores: Stores, project_ref: str, task_ref: str) -> ProjectTask:
    projects = stores.projects.list_projects()
    project = _require_project(projects, project_ref)
    task = project.complete_task(task_ref)
    stores.projects.save_projects(projects)
    return task


def set_project_status(stores: Stores, project_ref: str, status: str) -> Project:
    projects = stores.projects.list_projects()
    project = _require_project(projects, project_ref)
    project.status = ProjectStatus(status).value
    stores.projects.save_projects(projects)
    return project


# ============== Time Logging ==============


def log_time(
    stores: Stores,
    task: str,
    minutes: int,
    time_type: TimeType | str,
    now: datetime,
    project_ref: str | None = None,
) -> TimeLogEntry:
    """
    Append a time log entry.

    The project name is resolved once, here, against the active projects.
    A match stores the canonical name and the project id, and adds the hours
    to the matching task's counters. No match keeps the name as typed.
    """
    project_name = project_ref
    project_id = None
    task_id = None
    project_task = None

    projects = stores.projects.list_projects()
    project = resolve_project(project_ref, filter_active(projects)) if project_ref else None
    if project is not None:
        project_name = project.name
        project_id = project.id
        project_task = project.find_task(task) if task.strip() else None
        if project_task is not None:
            task_id = project_task.id
    elif project_ref:
        logger.info(f"No active project matches '{project_ref}'; logging it as typed")

    entry = new_time_log(
        task=task,
        duration=minutes,
        time_type=time_type,
        now=now,
        project=project_name,
        task_id=task_id,
        project_id=project_id,
    )
    stores.time_logs.append(entry)

    if project_task is not None:
        if entry.type == TimeType.INVESTED:
            project_task.invested_hours += entry.hours
        else:
            project_task.spent_hours += entry.hours
        stores.projects.save_projects(projects)

    return entry


@dataclass
class WeeklyReport:
    week_start: datetime
    summaries: list[WeeklyProjectSummary]
    unmatched: list[TimeLogEntry]


def weekly_report(stores: Stores, now: datetime) -> WeeklyReport:
    """This week's per-project summaries for the active projects."""
    projects = filter_active(stores.projects.list_projects())
    logs = stores.time_logs.list_time_logs()
    logger.debug(f"Aggregating {len(logs)} time logs over {len(projects)} active projects")

    unmatched = unmatched_logs(projects, logs, now)
    if unmatched:
        logger.debug(f"{len(unmatched)} time logs this week match no active project")

    return WeeklyReport(
        week_start=start_of_week(now),
        summaries=compute_weekly_summaries(projects, logs, now),
        unmatched=unmatched,
    )


def today_sessions(stores: Stores, now: datetime) -> tuple[list[CombinedSession], DayStats]:
    """Logs from the calendar day of `now`, in `now`'s timezone."""
    logs = logs_for_day(stores.time_logs.list_time_logs(), now.date(), now.tzinfo)
    return combine_sessions(logs), day_stats(logs)


def dashboard_overview(stores: Stores, now: datetime) -> WeeklyOverview:
    return weekly_time_overview(
        stores.time_logs.list_time_logs(),
        stores.leisure.list_activities(),
        stores.reading.list_reading(),
        now,
    )


# ============== Reading / Leisure / Memos ==============


def _find_by_name(items: list, name: str, attr: str):
    wanted = name.strip().lower()
    for item in items:
        if item.id == name or getattr(item, attr).strip().lower() == wanted:
            return item
    return None


def add_reading(
    stores: Stores, title: str, author: str = "", type: str = "book", category: str = "productivity"
) -> ReadingEntry:
    if not title.strip():
        raise ValueError("Title must not be empty")
    entries = stores.reading.list_reading()
    entry = ReadingEntry(id=_new_id(), title=title.strip(), author=author, type=type, category=category)
    entries.append(entry)
    stores.reading.save_reading(entries)
    return entry


def log_reading(
    stores: Stores,
    title: str,
    minutes: int,
    now: datetime,
    pages: int | None = None,
    notes: str = "",
) -> ReadingSession:
    if minutes <= 0:
        raise ValueError("Duration must be a positive number of minutes")
    entries = stores.reading.list_reading()
    entry = _find_by_name(entries, title, "title")
    if entry is None:
        raise LookupError(f"No reading item titled '{title}'")
    session = ReadingSession(id=_new_id(), date=now, duration=minutes, pages=pages, notes=notes)
    entry.sessions.append(session)
    stores.reading.save_reading(entries)
    return session


def add_activity(
    stores: Stores,
    name: str,
    category: str = "relaxation",
    frequency: str = "weekly",
    intention: str = "",
    target_sessions: int = 1,
) -> LeisureActivity:
    if not name.strip():
        raise ValueError("Activity name must not be empty")
    if target_sessions < 1:
        raise ValueError("Target sessions must be at least 1")
    activities = stores.leisure.list_activities()
    activity = LeisureActivity(
        id=_new_id(),
        name=name.strip(),
        category=category,
        frequency=frequency,
        intention=intention,
        target_sessions=target_sessions,
    )
    activities.append(activity)
    stores.leisure.save_activities(activities)
    return activity


def log_activity(stores: Stores, name: str, minutes: int, now: datetime, notes: str = "") -> ActivitySession:
    if minutes <= 0:
        raise ValueError("Duration must be a positive number of minutes")
    activities = stores.leisure.list_activities()
    activity = _find_by_name(activities, name, "name")
    if activity is None:
        raise LookupError(f"No leisure activity named '{name}'")
    session = ActivitySession(id=_new_id(), date=now, duration=minutes, notes=notes)
    activity.sessions.append(session)
    stores.leisure.save_activities(activities)
    return session


def add_memo(
    stores: Stores,
    title: str,
    now: datetime,
    transcription: str = "",
    duration: int = 0,
    tags: list[str] | None = None,
    project_ref: str | None = None,
) -> VoiceMemo:
    linked_name = None
    if project_ref:
        project = resolve_project(project_ref, stores.projects.list_projects())
        linked_name = project.name if project else project_ref.strip()

    memos = stores.memos.list_memos()
    memo = VoiceMemo(
        id=_new_id(),
        title=title.strip(),
        duration=duration,
        timestamp=now,
        transcription=transcription,
        tags=tags or [],
        linked_type="project" if linked_name else None,
        linked_name=linked_name,
    )
    memos.append(memo)
    stores.memos.save_memos(memos)
    return memo


# ============== Strategy ==============


@dataclass
class StrategyStatus:
    session: WeeklySession
    agenda: list[AgendaItem]
    strategy_day: str
    is_due: bool
    next_date: date
    days_until: int

    @property
    def progress(self) -> int:
        return self.session.progress(self.agenda)


def strategy_status(stores: Stores, now: datetime) -> StrategyStatus:
    """
    Load this week's strategy session and its schedule.

    A fresh session is only saved once something in it changes.
    """
    saved = stores.strategy.load_current()
    session = current_session(saved, now)
    started = session if session is saved else None

    day = stores.strategy.load_strategy_day()
    history = stores.strategy.list_history()
    today = now.date()
    return StrategyStatus(
        session=session,
        agenda=stores.strategy.load_agenda(),
        strategy_day=day,
        is_due=is_session_due(day, today),
        next_date=next_session_date(day, history, today),
        days_until=days_until_next_session(day, history, started, today),
    )


def toggle_agenda_item(stores: Stores, item_id: str, now: datetime) -> bool:
    status = strategy_status(stores, now)
    if item_id not in {item.id for item in status.agenda}:
        raise LookupError(f"No agenda item '{item_id}'")
    done = status.session.toggle_item(item_id)
    stores.strategy.save_current(status.session)
    return done


def add_session_note(stores: Stores, item_id: str, text: str, now: datetime) -> None:
    status = strategy_status(stores, now)
    status.session.set_note(item_id, text)
    stores.strategy.save_current(status.session)


def complete_strategy_session(stores: Stores, now: datetime) -> WeeklySession:
    """Mark this week's session complete and move it into history."""
    status = strategy_status(stores, now)
    session = status.session
    session.complete()
    stores.strategy.save_current(session)
    stores.strategy.append_history(session)
    return session


def plan_projects(stores: Stores, worksheet: StrategyWorksheet) -> list[Project]:
    """Save the worksheet's project drafts as projects in the planning stage."""
    planned = worksheet.to_projects()
    if not planned:
        raise ValueError("The worksheet has no named projects")
    projects = stores.projects.list_projects()
    projects.extend(planned)
    stores.projects.save_projects(projects)
    logger.info(
        f"Planned {len(planned)} project(s) from {len(worksheet.dissatisfactions)} dissatisfaction(s)"
        f" and {len(worksheet.hypotheses)} hypothesis(es)"
    )
    return planned
