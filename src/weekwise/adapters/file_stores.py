"""File-based storage adapters - one JSON file per collection."""

import logging
from pathlib import Path

from weekwise.core.leisure import LeisureActivity
from weekwise.core.memos import VoiceMemo
from weekwise.core.projects import Project
from weekwise.core.reading import ReadingEntry
from weekwise.core.strategy import DEFAULT_AGENDA, AgendaItem, WeeklySession
from weekwise.core.timelog import TimeLogEntry

from .json_store import PARSE_ERRORS, JsonCollectionFile, JsonFile

logger = logging.getLogger(__name__)


class FileProjectStore:
    """
    File-based project storage.

    Implements ProjectStore protocol. All projects live in projects.json.
    """

    def __init__(self, data_dir: Path | str):
        self.file = JsonCollectionFile(Path(data_dir).expanduser() / "projects.json")

    def list_projects(self) -> list[Project]:
        return self.file.load(Project.from_dict)

    def save_projects(self, projects: list[Project]) -> None:
        self.file.save(projects, Project.to_dict, Project.from_dict)


class FileTimeLogStore:
    """
    Append-only time log in timeLogs.json.

    Implements TimeLogStore protocol. Appending keeps every stored record as-is,
    including ones this version can't parse.
    """

    def __init__(self, data_dir: Path | str):
        self.file = JsonCollectionFile(Path(data_dir).expanduser() / "timeLogs.json")

    def list_time_logs(self) -> list[TimeLogEntry]:
        return self.file.load(TimeLogEntry.from_dict)

    def append(self, entry: TimeLogEntry) -> None:
        records = self.file.read_items()
        records.append(entry.to_dict())
        self.file.write(records)
        logger.debug(f"Logged {entry.duration}m {entry.type.value} on {entry.task!r} ({entry.project})")


class FileReadingStore:
    """Implements ReadingStore protocol."""

    def __init__(self, data_dir: Path | str):
        self.file = JsonCollectionFile(Path(data_dir).expanduser() / "readingEntries.json")

    def list_reading(self) -> list[ReadingEntry]:
        return self.file.load(ReadingEntry.from_dict)

    def save_reading(self, entries: list[ReadingEntry]) -> None:
        self.file.save(entries, ReadingEntry.to_dict, ReadingEntry.from_dict)


class FileLeisureStore:
    """Implements LeisureStore protocol."""

    def __init__(self, data_dir: Path | str):
        self.file = JsonCollectionFile(Path(data_dir).expanduser() / "leisureActivities.json")

    def list_activities(self) -> list[LeisureActivity]:
        return self.file.load(LeisureActivity.from_dict)

    def save_activities(self, activities: list[LeisureActivity]) -> None:
        self.file.save(activities, LeisureActivity.to_dict, LeisureActivity.from_dict)


class FileMemoStore:
    """Implements MemoStore protocol."""

    def __init__(self, data_dir: Path | str):
        self.file = JsonCollectionFile(Path(data_dir).expanduser() / "voiceMemos.json")

    def list_memos(self) -> list[VoiceMemo]:
        return self.file.load(VoiceMemo.from_dict)

    def save_memos(self, memos: list[VoiceMemo]) -> None:
        self.file.save(memos, VoiceMemo.to_dict, VoiceMemo.from_dict)


class FileStrategyStore:
    """
    File-based storage for the weekly strategy ritual.

    Implements StrategyStore protocol. Keeps the in-progress session, the
    history of finished sessions, the agenda and the chosen weekday in
    separate files under a `strategy/` directory.
    """

    def __init__(self, data_dir: Path | str, default_day: str = "Sunday"):
        base = Path(data_dir).expanduser() / "strategy"
        self.default_day = default_day
        self._current = JsonFile(base / "currentWeeklySession.json")
        self._history = JsonCollectionFile(base / "weeklyStrategyHistory.json")
        self._agenda = JsonCollectionFile(base / "weeklyAgendaItems.json")
        self._day = JsonFile(base / "weeklyStrategyDay.json")

    def load_current(self) -> WeeklySession | None:
        data = self._current.read()
        if not isinstance(data, dict):
            return None
        try:
            return WeeklySession.from_dict(data)
        except PARSE_ERRORS as e:
            logger.warning(f"Discarding unreadable current strategy session: {e}")
            return None

    def save_current(self, session: WeeklySession) -> None:
        self._current.write(session.to_dict())

    def list_history(self) -> list[WeeklySession]:
        return self._history.load(WeeklySession.from_dict)

    def append_history(self, session: WeeklySession) -> None:
        records = self._history.read_items()
        records.append(session.to_dict())
        self._history.write(records)

    def load_agenda(self) -> list[AgendaItem]:
        items = self._agenda.load(AgendaItem.from_dict)
        return items or list(DEFAULT_AGENDA)

    def save_agenda(self, items: list[AgendaItem]) -> None:
        self._agenda.save(items, AgendaItem.to_dict)

    def load_strategy_day(self) -> str:
        day = self._day.read()
        return day if isinstance(day, str) and day else self.default_day

    def save_strategy_day(self, day: str) -> None:
        self._day.write(day)
