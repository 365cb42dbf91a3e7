"""Tests for the weekly strategy ritual."""

from datetime import date, datetime

import pytest

from weekwise.core.projects import LifeArea
from weekwise.core.strategy import (
    DEFAULT_AGENDA,
    ProjectDraft,
    StrategyWorksheet,
    WeeklySession,
    current_session,
    days_until_next_session,
    is_session_due,
    next_session_date,
    week_id,
    weekday_index,
)


@pytest.fixture
def today():
    """A Wednesday."""
    return date(2025, 1, 15)


def session(d: date, completed: bool = True) -> WeeklySession:
    return WeeklySession(id=week_id(d), date=datetime.combine(d, datetime.min.time()), completed=completed)


class TestWeekId:
    @pytest.mark.parametrize(
        "d,expected",
        [
            (date(2025, 1, 1), "2025-W1"),
            (date(2025, 1, 4), "2025-W1"),
            (date(2025, 1, 5), "2025-W2"),
            (date(2025, 1, 15), "2025-W3"),
        ],
    )
    def test_sunday_start_weeks(self, d, expected):
        assert week_id(d) == expected


class TestWeekdayIndex:
    def test_names(self):
        assert weekday_index("Monday") == 0
        assert weekday_index("sunday") == 6

    def test_unknown(self):
        with pytest.raises(ValueError):
            weekday_index("Someday")


class TestScheduling:
    def test_is_session_due(self, today):
        assert is_session_due("Wednesday", today)
        assert not is_session_due("Sunday", today)

    def test_next_date_without_history(self, today):
        assert next_session_date("Sunday", [], today) == date(2025, 1, 19)

    def test_next_date_on_strategy_day_is_next_week(self):
        sunday = date(2025, 1, 19)
        assert next_session_date("Sunday", [], sunday) == date(2025, 1, 26)

    def test_next_date_a_week_after_last_session(self, today):
        history = [session(date(2025, 1, 12)), session(date(2025, 1, 5))]
        assert next_session_date("Sunday", history, today) == date(2025, 1, 19)

    def test_late_session_rolls_forward_to_strategy_day(self, today):
        # Done on Monday instead of Sunday: next one is the Sunday after a full week
        history = [session(date(2025, 1, 13))]
        assert next_session_date("Sunday", history, today) == date(2025, 1, 26)

    def test_unfinished_sessions_are_ignored(self, today):
        history = [session(date(2025, 1, 12), completed=False)]
        assert next_session_date("Sunday", history, today) == date(2025, 1, 19)

    def test_days_until(self, today):
        assert days_until_next_session("Sunday", [], None, today) == 4

    def test_days_until_zero_when_started_today(self, today):
        current = session(today, completed=False)
        assert days_until_next_session("Sunday", [], current, today) == 0


class TestWeeklySession:
    def test_toggle_item(self):
        s = session(date(2025, 1, 15), completed=False)
        assert s.toggle_item("notesReview") is True
        assert s.completed_items == ["notesReview"]
        assert s.toggle_item("notesReview") is False
        assert s.completed_items == []

    def test_progress(self):
        s = session(date(2025, 1, 15), completed=False)
        s.toggle_item("notesReview")
        s.toggle_item("timeReflection")
        s.toggle_item("not-on-agenda")
        assert s.progress(DEFAULT_AGENDA) == 33
        assert s.progress([]) == 0

    def test_from_dict_tolerates_bad_fields(self):
        s = WeeklySession.from_dict(
            {"id": "2025-W3", "date": "2025-01-15T10:00:00.000Z", "completedItems": "oops", "notes": []}
        )
        assert s.completed_items == []
        assert s.notes == {}

    def test_roundtrip(self):
        s = session(date(2025, 1, 15), completed=False)
        s.set_note("timeReflection", "Too many meetings")
        assert WeeklySession.from_dict(s.to_dict()) == s


class TestCurrentSession:
    def test_resumes_unfinished_session_this_week(self):
        now = datetime(2025, 1, 15, 10, 0)
        saved = session(date(2025, 1, 13), completed=False)
        saved.toggle_item("notesReview")
        assert current_session(saved, now) is saved

    def test_new_session_after_completion(self):
        now = datetime(2025, 1, 15, 10, 0)
        saved = session(date(2025, 1, 13), completed=True)
        fresh = current_session(saved, now)
        assert fresh is not saved
        assert fresh.id == "2025-W3"
        assert fresh.completed_items == []

    def test_new_session_in_new_week(self):
        now = datetime(2025, 1, 20, 10, 0)
        saved = session(date(2025, 1, 13), completed=False)
        assert current_session(saved, now).id == "2025-W4"

    def test_nothing_saved(self):
        now = datetime(2025, 1, 15, 10, 0)
        assert current_session(None, now).date == now


class TestWorksheet:
    def test_to_projects_skips_blank_drafts(self):
        sheet = StrategyWorksheet(
            dissatisfactions=["Too little exercise"],
            hypotheses=["Morning swims would help"],
            projects=[ProjectDraft("  Swim plan ", "Twice a week", "Health & Routines"), ProjectDraft("   ")],
        )

        [project] = sheet.to_projects()

        assert project.name == "Swim plan"
        assert project.status == "planning"
        assert project.life_area == "Health & Routines"
        assert not project.is_active

    def test_drafts_default_to_work(self):
        [project] = StrategyWorksheet(projects=[ProjectDraft("Side project")]).to_projects()
        assert project.life_area == LifeArea.WORK.value

    def test_from_dict_drops_blank_lines(self):
        sheet = StrategyWorksheet.from_dict(
            {
                "dissatisfactions": ["a", " "],
                "hypotheses": [""],
                "projects": [{"name": "x", "lifeArea": "Personal Growth"}, {"name": "y"}],
            }
        )
        assert sheet.dissatisfactions == ["a"]
        assert sheet.hypotheses == []
        assert sheet.projects[0].life_area == "Personal Growth"
        assert sheet.projects[1].life_area == LifeArea.WORK.value
