"""Tests for the click command line."""

import json
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from weekwise.cli import main
from weekwise.config import Config

NOW = datetime(2025, 1, 15, 14, 0)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=str(tmp_path))


@pytest.fixture(autouse=True)
def env(config):
    with patch("weekwise.cli.load_config", return_value=config), patch(
        "weekwise.cli.current_time", return_value=NOW
    ):
        yield


def invoke(runner, *args):
    return runner.invoke(main, list(args))


class TestProjects:
    def test_add_and_list(self, runner):
        result = invoke(runner, "projects", "add", "Blog", "--area", "Creative Projects")
        assert result.exit_code == 0
        assert "Created project 'Blog'" in result.output

        invoke(runner, "projects", "add-task", "blog", "Outline", "--estimate", "2")
        result = invoke(runner, "projects", "list")
        assert "Blog (Creative Projects) - 0/1 tasks" in result.output

    def test_list_empty(self, runner):
        result = invoke(runner, "projects", "list")
        assert "No active projects found." in result.output

    def test_unknown_project_fails(self, runner):
        result = invoke(runner, "projects", "add-task", "Nope", "Outline")
        assert result.exit_code == 1
        assert "Error: No project named 'Nope'" in result.output


class TestLogAndWeek:
    def test_week_report(self, runner):
        invoke(runner, "projects", "add", "Blog")
        result = invoke(runner, "log", "Outline", "60", "--project", "blog")
        assert result.exit_code == 0
        assert "Logged 1h 0m invested on Blog" in result.output

        result = invoke(runner, "week")

        assert "Week of Monday, January 13" in result.output
        assert "1.0h this week" in result.output
        assert "Outline (invested): 1.0h" in result.output

    def test_week_json(self, runner):
        invoke(runner, "projects", "add", "Blog")
        invoke(runner, "log", "Outline", "30", "-p", "Blog")
        invoke(runner, "log", "Scrolling", "15", "--type", "spent", "-p", "Phone")

        data = json.loads(invoke(runner, "week", "--json").output)

        assert data["weekStart"] == "2025-01-13T00:00:00"
        assert data["projects"][0]["totalHours"] == 0.5
        assert [log["task"] for log in data["unmatched"]] == ["Scrolling"]

    def test_show_unmatched(self, runner):
        invoke(runner, "projects", "add", "Blog")
        invoke(runner, "log", "Scrolling", "15", "--type", "spent", "-p", "Phone")
        result = invoke(runner, "week", "--show-unmatched")
        assert "1 log(s) this week match no active project" in result.output

    def test_no_projects(self, runner):
        result = invoke(runner, "week")
        assert "No active projects found." in result.output

    def test_invalid_duration(self, runner):
        result = invoke(runner, "log", "Outline", "0")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_today(self, runner):
        invoke(runner, "log", "Walk", "20")
        invoke(runner, "log", "Walk", "25")
        result = invoke(runner, "today")
        assert "Today: 45m total" in result.output
        assert "Walk 2x - 45m" in result.output


class TestTimer:
    @pytest.fixture
    def clock(self):
        return [NOW]

    def test_logs_full_pomodoro(self, runner, clock):
        def tick(seconds):
            clock[0] += timedelta(minutes=5)

        invoke(runner, "projects", "add", "Blog")
        with patch("weekwise.cli.current_time", side_effect=lambda config: clock[0]), patch(
            "weekwise.cli.time.sleep", side_effect=tick
        ):
            result = invoke(runner, "timer", "-p", "blog", "-t", "Draft")

        assert result.exit_code == 0
        assert "Logged 25m invested on Blog" in result.output

    def test_interrupt_logs_elapsed_time(self, runner, clock):
        def interrupt(seconds):
            clock[0] += timedelta(minutes=10)
            raise KeyboardInterrupt

        with patch("weekwise.cli.current_time", side_effect=lambda config: clock[0]), patch(
            "weekwise.cli.time.sleep", side_effect=interrupt
        ):
            result = invoke(runner, "timer", "-p", "Blog", "--minutes", "15")

        assert "Logged 10m invested on Blog" in result.output

    def test_project_required(self, runner):
        result = invoke(runner, "timer")
        assert result.exit_code != 0


class TestStrategy:
    def test_check_and_status(self, runner):
        result = invoke(runner, "strategy", "check", "notesReview")
        assert "Checked notesReview" in result.output

        result = invoke(runner, "strategy", "status")
        assert "Strategy session 2025-W3" in result.output
        assert "Progress: 17%" in result.output
        assert "[x] notesReview" in result.output

    def test_unknown_item(self, runner):
        result = invoke(runner, "strategy", "check", "gym")
        assert result.exit_code == 1

    def test_day(self, runner):
        result = invoke(runner, "strategy", "day", "wednesday")
        assert "now on Wednesday" in result.output
        assert "due today" in invoke(runner, "strategy", "status").output

    def test_plan(self, runner):
        result = invoke(
            runner, "strategy", "plan", "-d", "No exercise", "--hypothesis", "Swim mornings",
            "-p", "Swim plan", "--area", "Health & Routines",
        )
        assert result.exit_code == 0
        assert "Planned 'Swim plan' (Health & Routines)" in result.output

        listing = invoke(runner, "projects", "list", "--all").output
        assert "Swim plan [planning] (Health & Routines)" in listing
        assert "No active projects found." in invoke(runner, "projects", "list").output

    def test_plan_requires_project(self, runner):
        assert invoke(runner, "strategy", "plan", "-d", "No exercise").exit_code == 2

    def test_dashboard(self, runner):
        invoke(runner, "projects", "add", "Blog")
        invoke(runner, "log", "Outline", "90", "-p", "Blog")
        result = invoke(runner, "dashboard")
        assert "Invested: 1.5h" in result.output
        assert "Active projects: 1" in result.output
