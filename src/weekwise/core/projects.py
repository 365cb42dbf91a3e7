"""Pure project domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from enum import Enum


class LifeArea(str, Enum):
    """Fixed categories used to group projects."""

    WORK = "Work / Career"
    PERSONAL_GROWTH = "Personal Growth"
    CREATIVE = "Creative Projects"
    HEALTH = "Health & Routines"
    RELATIONSHIPS = "Relationships / Family"
    LEISURE = "Leisure/Hobby"


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"


def _hours(value) -> float:
    """Missing or malformed hour counters load as zero."""
    try:
        return max(float(value or 0), 0.0)
    except (TypeError, ValueError):
        return 0.0


def _name(data: dict) -> str:
    name = data.get("name") or ""
    if not isinstance(name, str):
        raise ValueError(f"name must be a string, got {name!r}")
    return name


@dataclass
class ProjectTask:
    """A task owned by exactly one project."""

    id: str
    name: str
    completed: bool = False
    estimated_hours: float = 0.0
    invested_hours: float = 0.0
    spent_hours: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectTask":
        return cls(
            id=str(data.get("id", "")),
            name=_name(data),
            completed=bool(data.get("completed", False)),
            estimated_hours=_hours(data.get("estimatedHours")),
            invested_hours=_hours(data.get("investedHours")),
            spent_hours=_hours(data.get("spentHours")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "completed": self.completed,
            "estimatedHours": self.estimated_hours,
            "investedHours": self.invested_hours,
            "spentHours": self.spent_hours,
        }


@dataclass
class Project:
    """A project in one life area, joined to time logs by name."""

    id: str
    name: str
    life_area: str = LifeArea.WORK.value
    status: str | None = ProjectStatus.ACTIVE.value
    description: str = ""
    tasks: list[ProjectTask] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """Active or unset status counts as active."""
        return not self.status or self.status == ProjectStatus.ACTIVE.value

    def task_progress(self) -> tuple[int, int]:
        """(completed, total) task counts."""
        done = sum(1 for t in self.tasks if t.completed)
        return done, len(self.tasks)

    def completion_percent(self) -> int:
        done, total = self.task_progress()
        if not total:
            return 0
        return round(done / total * 100)

    def add_task(self, task_id: str, name: str, estimated_hours: float = 0.0) -> ProjectTask:
        name = name.strip()
        if not name:
            raise ValueError("Task name must not be empty")
        if estimated_hours < 0:
            raise ValueError("Estimated hours must be non-negative")
        task = ProjectTask(id=task_id, name=name, estimated_hours=estimated_hours)
        self.tasks.append(task)
        return task

    def find_task(self, task_ref: str) -> ProjectTask | None:
        """Find a task by id, then by case-insensitive name."""
        for t in self.tasks:
            if t.id == task_ref:
                return t
        for t in self.tasks:
            if t.name.lower() == task_ref.strip().lower():
                return t
        return None

    def complete_task(self, task_ref: str) -> ProjectTask:
        task = self.find_task(task_ref)
        if task is None:
            raise ValueError(f"No task '{task_ref}' in project '{self.name}'")
        task.completed = True
        return task

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=str(data.get("id", "")),
            name=_name(data),
            life_area=data.get("lifeArea", "") or "",
            status=data.get("status") or None,
            description=data.get("description", "") or "",
            tasks=[ProjectTask.from_dict(t) for t in data.get("tasks") or []],
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "lifeArea": self.life_area,
            "description": self.description,
            "tasks": [t.to_dict() for t in self.tasks],
        }
        if self.status:
            data["status"] = self.status
        return data


def filter_active(projects: list[Project]) -> list[Project]:
    """
    Filter to projects with status 'active' or no status at all.

    Pure function - no I/O. Input order is preserved.
    """
    return [p for p in projects if p.is_active]


def filter_by_life_area(projects: list[Project], life_area: str) -> list[Project]:
    """Filter projects to a single life area (case-insensitive)."""
    return [p for p in projects if p.life_area.lower() == life_area.lower()]


def find_project(projects: list[Project], name_or_id: str) -> Project | None:
    """Look a project up by id, exact name, then case-insensitive name."""
    for p in projects:
        if p.id == name_or_id:
            return p
    for p in projects:
        if p.name == name_or_id:
            return p
    wanted = name_or_id.strip().lower()
    for p in projects:
        if p.name.strip().lower() == wanted:
            return p
    return None
