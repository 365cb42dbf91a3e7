"""Strategy session storage interface."""

from typing import Protocol

from weekwise.core.strategy import AgendaItem, WeeklySession


class StrategyStore(Protocol):
    """Interface for the weekly strategy ritual's state."""

    def load_current(self) -> WeeklySession | None:
        """The in-progress session, or None if there isn't one."""
        ...

    def save_current(self, session: WeeklySession) -> None:
        ...

    def list_history(self) -> list[WeeklySession]:
        """Completed sessions, oldest first."""
        ...

    def append_history(self, session: WeeklySession) -> None:
        ...

    def load_agenda(self) -> list[AgendaItem]:
        """Agenda items, falling back to the default agenda."""
        ...

    def save_agenda(self, items: list[AgendaItem]) -> None:
        ...

    def load_strategy_day(self) -> str:
        ...

    def save_strategy_day(self, day: str) -> None:
        ...
