"""Voice memos with transcriptions, tags and optional links."""

from dataclasses import dataclass, field
from datetime import datetime

from .timelog import parse_timestamp


@dataclass
class VoiceMemo:
    id: str
    title: str
    duration: int
    timestamp: datetime
    transcription: str = ""
    tags: list[str] = field(default_factory=list)
    linked_type: str | None = None
    linked_name: str | None = None

    def format_duration(self) -> str:
        """Seconds as M:SS."""
        return f"{self.duration // 60}:{self.duration % 60:02d}"

    @classmethod
    def from_dict(cls, data: dict) -> "VoiceMemo":
        link = data.get("linkedTo") or {}
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            duration=int(data.get("duration") or 0),
            timestamp=parse_timestamp(data.get("timestamp", "")),
            transcription=data.get("transcription", "") or "",
            tags=list(data.get("tags") or []),
            linked_type=link.get("type"),
            linked_name=link.get("name"),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "duration": self.duration,
            "timestamp": self.timestamp.isoformat(),
            "transcription": self.transcription,
            "tags": self.tags,
            "linkedTo": None,
        }
        if self.linked_type and self.linked_name:
            data["linkedTo"] = {"type": self.linked_type, "name": self.linked_name}
        return data


def filter_by_tag(memos: list[VoiceMemo], tag: str) -> list[VoiceMemo]:
    tag = tag.strip().lower()
    return [m for m in memos if tag in (t.lower() for t in m.tags)]


def memos_linked_to(memos: list[VoiceMemo], project_name: str) -> list[VoiceMemo]:
    """Memos linked to a project by name (case-insensitive)."""
    wanted = project_name.strip().lower()
    return [
        m
        for m in memos
        if m.linked_type == "project" and m.linked_name and m.linked_name.strip().lower() == wanted
    ]
