"""Ports - interfaces/protocols for external dependencies."""

from .project_store import ProjectStore
from .time_log_store import TimeLogStore
from .activity_stores import LeisureStore, MemoStore, ReadingStore
from .strategy_store import StrategyStore

__all__ = [
    "ProjectStore",
    "TimeLogStore",
    "ReadingStore",
    "LeisureStore",
    "MemoStore",
    "StrategyStore",
]
