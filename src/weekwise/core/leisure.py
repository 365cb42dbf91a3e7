"""Leisure activities with intentions and session targets."""

from dataclasses import dataclass, field
from datetime import datetime

from .timelog import parse_timestamp
from .weekly import align_tz

LEISURE_CATEGORIES = ("exercise", "creative", "social", "outdoor", "intellectual", "relaxation")
FREQUENCIES = ("daily", "weekly", "bi-weekly", "monthly")


@dataclass
class ActivitySession:
    id: str
    date: datetime
    duration: int
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ActivitySession":
        return cls(
            id=str(data.get("id", "")),
            date=parse_timestamp(data.get("date", "")),
            duration=int(data.get("duration") or 0),
            notes=data.get("notes", "") or "",
        )

    def to_dict(self) -> dict:
        data = {"id": self.id, "date": self.date.isoformat(), "duration": self.duration}
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass
class LeisureActivity:
    """A recurring leisure activity, e.g. swimming twice a week."""

    id: str
    name: str
    category: str = "relaxation"
    frequency: str = "weekly"
    intention: str = ""
    target_sessions: int = 1
    sessions: list[ActivitySession] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(s.duration for s in self.sessions) / 60

    @property
    def last_session(self) -> ActivitySession | None:
        if not self.sessions:
            return None
        return max(self.sessions, key=lambda s: s.date)

    def sessions_since(self, start: datetime) -> list[ActivitySession]:
        return [s for s in self.sessions if align_tz(s.date, start) >= start]

    def hours_since(self, start: datetime) -> float:
        return sum(s.duration for s in self.sessions_since(start)) / 60

    def target_met(self, start: datetime) -> bool:
        return len(self.sessions_since(start)) >= self.target_sessions

    @classmethod
    def from_dict(cls, data: dict) -> "LeisureActivity":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            category=data.get("category", "relaxation") or "relaxation",
            frequency=data.get("frequency", "weekly") or "weekly",
            intention=data.get("intention", "") or "",
            target_sessions=int(data.get("targetSessions") or 1),
            sessions=[ActivitySession.from_dict(s) for s in data.get("sessions") or []],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "frequency": self.frequency,
            "intention": self.intention,
            "targetSessions": self.target_sessions,
            "completedSessions": len(self.sessions),
            "totalHours": self.total_hours,
            "sessions": [s.to_dict() for s in self.sessions],
        }


def weekly_leisure_hours(activities: list[LeisureActivity], start: datetime) -> float:
    """Hours of leisure logged since `start` across all activities."""
    return sum(a.hours_since(start) for a in activities)
