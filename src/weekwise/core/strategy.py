"""Weekly strategy ritual - agenda, session tracking and scheduling."""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from .projects import LifeArea, Project, ProjectStatus
from .timelog import parse_timestamp

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class AgendaItem:
    id: str
    title: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AgendaItem":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            description=data.get("description", "") or "",
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "description": self.description}


DEFAULT_AGENDA = (
    AgendaItem(
        "notesReview",
        "Review and clean up notes and drafts",
        "Go through your notes, organize thoughts, clean up drafts",
    ),
    AgendaItem(
        "dissatisfactionsUpdate",
        "Update list of dissatisfactions",
        "Reflect on current dissatisfactions, add new ones, resolve completed ones",
    ),
    AgendaItem(
        "prioritiesAdjustment",
        "Adjust priorities of current projects",
        "Review project priorities based on recent progress and changing circumstances",
    ),
    AgendaItem(
        "timeReflection",
        "Reflect on time spent/invested last week",
        "Analyze how time was allocated, identify patterns and improvements",
    ),
    AgendaItem(
        "tasksPlanning",
        "Adjust project tasks for coming week",
        "Plan specific tasks and deliverables for the upcoming week",
    ),
    AgendaItem(
        "pomodoroPlanning",
        "Plan in Pomodoro tracker and assign time estimates",
        "Allocate time blocks and estimate effort for planned tasks",
    ),
)


def week_id(d: date) -> str:
    """
    Week label like '2025-W3'.

    Weeks are counted from January 1st with Sunday as the first day.
    """
    start_of_year = date(d.year, 1, 1)
    days = (d - start_of_year).days
    # Sunday=0 ... Saturday=6
    first_weekday = (start_of_year.weekday() + 1) % 7
    return f"{d.year}-W{math.ceil((days + first_weekday + 1) / 7)}"


def weekday_index(day_name: str) -> int:
    """Python weekday (Monday=0) for a day name."""
    try:
        return DAY_NAMES.index(day_name.strip().capitalize())
    except ValueError:
        raise ValueError(f"Unknown day: {day_name!r}")


@dataclass
class WeeklySession:
    """One week's run through the strategy agenda."""

    id: str
    date: datetime
    completed: bool = False
    completed_items: list[str] = field(default_factory=list)
    notes: dict[str, str] = field(default_factory=dict)

    def toggle_item(self, item_id: str) -> bool:
        """Flip an agenda item. Returns whether it is now done."""
        if item_id in self.completed_items:
            self.completed_items.remove(item_id)
            return False
        self.completed_items.append(item_id)
        return True

    def set_note(self, item_id: str, text: str) -> None:
        self.notes[item_id] = text

    def progress(self, agenda: list[AgendaItem] | tuple[AgendaItem, ...]) -> int:
        """Percent of agenda items checked off."""
        if not agenda:
            return 0
        done = sum(1 for item in agenda if item.id in self.completed_items)
        return round(done / len(agenda) * 100)

    def complete(self) -> None:
        self.completed = True

    @classmethod
    def from_dict(cls, data: dict) -> "WeeklySession":
        items = data.get("completedItems")
        notes = data.get("notes")
        return cls(
            id=str(data.get("id", "")),
            date=parse_timestamp(data.get("date", "")),
            completed=bool(data.get("completed", False)),
            completed_items=list(items) if isinstance(items, list) else [],
            notes=dict(notes) if isinstance(notes, dict) else {},
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "completed": self.completed,
            "completedItems": self.completed_items,
            "notes": self.notes,
        }


def current_session(saved: WeeklySession | None, now: datetime) -> WeeklySession:
    """Resume this week's unfinished session, or start a fresh one."""
    this_week = week_id(now.date())
    if saved and saved.id == this_week and not saved.completed:
        return saved
    return WeeklySession(id=this_week, date=now)


def is_session_due(strategy_day: str, today: date) -> bool:
    return today.weekday() == weekday_index(strategy_day)


def next_session_date(strategy_day: str, history: list[WeeklySession], today: date) -> date:
    """
    Date of the next strategy session.

    A week after the most recent completed session, rolled forward to the
    strategy day. With no completed sessions, the next strategy day after today.
    """
    target = weekday_index(strategy_day)
    completed = [s for s in history if s.completed]
    if completed:
        last = max(completed, key=lambda s: s.date)
        nxt = last.date.date() + timedelta(days=7)
        while nxt.weekday() != target:
            nxt += timedelta(days=1)
        return nxt

    days_until = (target - today.weekday()) % 7 or 7
    return today + timedelta(days=days_until)


def days_until_next_session(
    strategy_day: str,
    history: list[WeeklySession],
    current: WeeklySession | None,
    today: date,
) -> int:
    """0 when an unfinished session was started today, otherwise days to the next one."""
    if current and not current.completed and current.date.date() == today:
        return 0
    return (next_session_date(strategy_day, history, today) - today).days


@dataclass
class ProjectDraft:
    name: str
    description: str = ""
    life_area: str = LifeArea.WORK.value


@dataclass
class StrategyWorksheet:
    """Dissatisfactions lead to hypotheses, hypotheses lead to projects."""

    dissatisfactions: list[str] = field(default_factory=list)
    hypotheses: list[str] = field(default_factory=list)
    projects: list[ProjectDraft] = field(default_factory=list)

    def to_projects(self) -> list[Project]:
        """Turn non-blank drafts into projects in the planning stage."""
        return [
            Project(
                id=uuid.uuid4().hex,
                name=draft.name.strip(),
                life_area=draft.life_area,
                status=ProjectStatus.PLANNING.value,
                description=draft.description.strip(),
            )
            for draft in self.projects
            if draft.name.strip()
        ]

    @classmethod
    def from_dict(cls, data: dict) -> "StrategyWorksheet":
        return cls(
            dissatisfactions=[d for d in data.get("dissatisfactions") or [] if d.strip()],
            hypotheses=[h for h in data.get("hypotheses") or [] if h.strip()],
            projects=[
                ProjectDraft(
                    name=p.get("name", ""),
                    description=p.get("description", "") or "",
                    life_area=p.get("lifeArea") or LifeArea.WORK.value,
                )
                for p in data.get("projects") or []
            ],
        )
