"""Tests for today's session grouping."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from weekwise.core.sessions import combine_sessions, day_stats, logs_for_day
from weekwise.core.timelog import TimeLogEntry, TimeType


@pytest.fixture
def today():
    return date(2025, 1, 15)


def log(task, duration, type=TimeType.INVESTED, project=None, when=datetime(2025, 1, 15, 9, 0)):
    return TimeLogEntry(id=task, task=task, duration=duration, type=type, timestamp=when, project=project)


class TestLogsForDay:
    def test_filters_to_day(self, today):
        logs = [
            log("a", 25, when=datetime(2025, 1, 15, 0, 0)),
            log("b", 25, when=datetime(2025, 1, 14, 23, 59)),
            log("c", 25, when=datetime(2025, 1, 15, 23, 59)),
        ]
        assert [l.task for l in logs_for_day(logs, today)] == ["a", "c"]

    def test_utc_logs_use_the_local_day(self, today):
        toronto = ZoneInfo("America/Toronto")
        logs = [
            # 21:00 on the 15th in Toronto
            log("late", 25, when=datetime(2025, 1, 16, 2, 0, tzinfo=timezone.utc)),
            # 19:00 on the 14th in Toronto
            log("early", 25, when=datetime(2025, 1, 15, 0, 0, tzinfo=timezone.utc)),
        ]
        assert [l.task for l in logs_for_day(logs, today, toronto)] == ["late"]


class TestCombineSessions:
    def test_groups_by_task_and_type(self):
        logs = [
            log("Deep work", 25, project="Blog"),
            log("Deep work", 25, project="Blog"),
            log("Deep work", 10, type=TimeType.SPENT, project="Blog"),
            log("Email", 15, type=TimeType.SPENT),
        ]

        combined = combine_sessions(logs)

        assert [(c.task, c.type, c.total_minutes, c.count) for c in combined] == [
            ("Deep work", TimeType.INVESTED, 50, 2),
            ("Email", TimeType.SPENT, 15, 1),
            ("Deep work", TimeType.SPENT, 10, 1),
        ]

    def test_keeps_project_when_all_agree(self):
        [combined] = combine_sessions([log("Draft", 25, project="Blog"), log("Draft", 25, project="Blog")])
        assert combined.project == "Blog"

    def test_drops_project_when_projects_differ(self):
        logs = [
            log("Draft", 25, project="Blog"),
            log("Draft", 25, project="Book"),
            log("Draft", 25, project="Blog"),
        ]
        [combined] = combine_sessions(logs)
        assert combined.project is None
        assert combined.count == 3

    def test_empty(self):
        assert combine_sessions([]) == []


def test_day_stats():
    stats = day_stats([log("a", 25), log("b", 50), log("c", 15, type=TimeType.SPENT)])
    assert stats.total_minutes == 90
    assert stats.invested_minutes == 75
    assert stats.spent_minutes == 15
