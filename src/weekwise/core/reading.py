"""Reading log - books, podcasts, articles and blogs."""

from dataclasses import dataclass, field
from datetime import datetime

from .timelog import parse_timestamp
from .weekly import align_tz

READING_TYPES = ("book", "podcast", "article", "blog")
READING_CATEGORIES = ("productivity", "fiction", "business", "technology", "health", "philosophy")


@dataclass
class ReadingSession:
    id: str
    date: datetime
    duration: int
    pages: int | None = None
    notes: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ReadingSession":
        pages = data.get("pages")
        return cls(
            id=str(data.get("id", "")),
            date=parse_timestamp(data.get("date", "")),
            duration=int(data.get("duration") or 0),
            pages=int(pages) if pages is not None else None,
            notes=data.get("notes", "") or "",
        )

    def to_dict(self) -> dict:
        data = {"id": self.id, "date": self.date.isoformat(), "duration": self.duration}
        if self.pages is not None:
            data["pages"] = self.pages
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass
class ReadingEntry:
    """Something being read or listened to."""

    id: str
    title: str
    author: str = ""
    status: str = "reading"
    type: str = "book"
    category: str = "productivity"
    sessions: list[ReadingSession] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(s.duration for s in self.sessions)

    @property
    def total_pages(self) -> int:
        return sum(s.pages or 0 for s in self.sessions)

    def hours_since(self, start: datetime) -> float:
        return sum(s.duration for s in self.sessions if align_tz(s.date, start) >= start) / 60

    @classmethod
    def from_dict(cls, data: dict) -> "ReadingEntry":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            author=data.get("author", "") or "",
            status=data.get("status", "reading") or "reading",
            type=data.get("type", "book") or "book",
            category=data.get("category", "productivity") or "productivity",
            sessions=[ReadingSession.from_dict(s) for s in data.get("sessions") or []],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "status": self.status,
            "type": self.type,
            "category": self.category,
            "sessions": [s.to_dict() for s in self.sessions],
        }


def weekly_reading_hours(entries: list[ReadingEntry], start: datetime) -> float:
    """Hours of reading logged since `start`."""
    return sum(e.hours_since(start) for e in entries)
