"""Reading, leisure and voice memo repository interfaces."""

from typing import Protocol

from weekwise.core.leisure import LeisureActivity
from weekwise.core.memos import VoiceMemo
from weekwise.core.reading import ReadingEntry


class ReadingStore(Protocol):
    def list_reading(self) -> list[ReadingEntry]:
        ...

    def save_reading(self, entries: list[ReadingEntry]) -> None:
        ...


class LeisureStore(Protocol):
    def list_activities(self) -> list[LeisureActivity]:
        ...

    def save_activities(self, activities: list[LeisureActivity]) -> None:
        ...


class MemoStore(Protocol):
    def list_memos(self) -> list[VoiceMemo]:
        ...

    def save_memos(self, memos: list[VoiceMemo]) -> None:
        ...
