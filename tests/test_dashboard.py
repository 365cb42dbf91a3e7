"""Tests for the weekly overview and the reading / leisure / memo logs."""

from datetime import datetime

import pytest

from weekwise.core.dashboard import format_hours, format_minutes, weekly_time_overview
from weekwise.core.leisure import ActivitySession, LeisureActivity, weekly_leisure_hours
from weekwise.core.memos import VoiceMemo, filter_by_tag, memos_linked_to
from weekwise.core.reading import ReadingEntry, ReadingSession, weekly_reading_hours
from weekwise.core.timelog import TimeLogEntry, TimeType


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 14, 0)


@pytest.fixture
def monday():
    return datetime(2025, 1, 13)


@pytest.fixture
def swimming():
    return LeisureActivity(
        id="1",
        name="Swimming",
        category="exercise",
        target_sessions=2,
        sessions=[
            ActivitySession(id="a", date=datetime(2025, 1, 14, 7, 0), duration=45),
            ActivitySession(id="b", date=datetime(2025, 1, 10, 7, 0), duration=60),
        ],
    )


@pytest.fixture
def atomic_habits():
    return ReadingEntry(
        id="1",
        title="Atomic Habits",
        sessions=[
            ReadingSession(id="a", date=datetime(2025, 1, 13, 21, 0), duration=30, pages=20),
            ReadingSession(id="b", date=datetime(2025, 1, 12, 21, 0), duration=90, pages=40),
        ],
    )


class TestFormatting:
    @pytest.mark.parametrize(
        "hours,expected",
        [(0, "0m"), (0.25, "15m"), (0.999, "60m"), (1, "1.0h"), (2.25, "2.2h"), (12.5, "12.5h")],
    )
    def test_format_hours(self, hours, expected):
        assert format_hours(hours) == expected

    @pytest.mark.parametrize("minutes,expected", [(45, "45m"), (60, "1h 0m"), (125, "2h 5m"), (0, "0m")])
    def test_format_minutes(self, minutes, expected):
        assert format_minutes(minutes) == expected


class TestLeisure:
    def test_this_week_only(self, swimming, monday):
        assert weekly_leisure_hours([swimming], monday) == 0.75
        assert len(swimming.sessions_since(monday)) == 1
        assert not swimming.target_met(monday)

    def test_total_hours_and_last_session(self, swimming):
        assert swimming.total_hours == 1.75
        assert swimming.last_session.id == "a"

    def test_from_dict(self):
        activity = LeisureActivity.from_dict(
            {
                "id": 2,
                "name": "Golf",
                "frequency": "bi-weekly",
                "targetSessions": 1,
                "sessions": [{"id": 1, "date": "2025-01-14", "duration": 240}],
            }
        )
        assert activity.id == "2"
        assert activity.sessions[0].date == datetime(2025, 1, 14)
        assert activity.to_dict()["completedSessions"] == 1


class TestReading:
    def test_this_week_only(self, atomic_habits, monday):
        assert weekly_reading_hours([atomic_habits], monday) == 0.5

    def test_totals(self, atomic_habits):
        assert atomic_habits.total_minutes == 120
        assert atomic_habits.total_pages == 60

    def test_roundtrip(self, atomic_habits):
        assert ReadingEntry.from_dict(atomic_habits.to_dict()) == atomic_habits


class TestWeeklyOverview:
    def test_combines_sources(self, now, swimming, atomic_habits):
        logs = [
            TimeLogEntry("1", "Draft", 60, TimeType.INVESTED, datetime(2025, 1, 14, 9, 0), "Blog"),
            TimeLogEntry("2", "Scrolling", 30, TimeType.SPENT, datetime(2025, 1, 14, 22, 0)),
            TimeLogEntry("3", "Old", 600, TimeType.INVESTED, datetime(2025, 1, 12, 9, 0), "Blog"),
        ]

        overview = weekly_time_overview(logs, [swimming], [atomic_habits], now)

        assert overview.week_start == datetime(2025, 1, 13)
        assert overview.time_log_invested == 1.0
        assert overview.leisure_hours == 0.75
        assert overview.reading_hours == 0.5
        assert overview.invested == 2.25
        assert overview.spent == 0.5
        assert overview.invested_ratio == pytest.approx(2.25 / 2.75)

    def test_empty_week(self, now):
        overview = weekly_time_overview([], [], [], now)
        assert overview.invested == 0
        assert overview.invested_ratio == 0.0


class TestMemos:
    @pytest.fixture
    def memos(self):
        ts = datetime(2025, 1, 15, 9, 0)
        return [
            VoiceMemo("1", "Fitness idea", 154, ts, tags=["idea", "Fitness"], linked_type="project",
                      linked_name="Fitness App"),
            VoiceMemo("2", "Productivity", 105, ts, tags=["reflection"], linked_type="note",
                      linked_name="Productivity insights"),
            VoiceMemo("3", "Habits", 192, ts, tags=["reading"]),
        ]

    def test_filter_by_tag(self, memos):
        assert [m.id for m in filter_by_tag(memos, "fitness")] == ["1"]

    def test_linked_to_project(self, memos):
        assert [m.id for m in memos_linked_to(memos, "fitness app")] == ["1"]
        # Links to notes are not project links
        assert memos_linked_to(memos, "Productivity insights") == []

    def test_format_duration(self, memos):
        assert memos[0].format_duration() == "2:34"

    def test_unlinked_roundtrip(self, memos):
        data = memos[2].to_dict()
        assert data["linkedTo"] is None
        assert VoiceMemo.from_dict(data) == memos[2]
