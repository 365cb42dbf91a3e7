"""Weekwise CLI - personal productivity tracker."""

import json
import logging
import sys
import time

import click

from .config import load_config
from .core.dashboard import format_hours, format_minutes
from .core.leisure import FREQUENCIES, LEISURE_CATEGORIES
from .core.memos import filter_by_tag, memos_linked_to
from .core.pomodoro import PRESETS, PomodoroTimer, format_clock
from .core.projects import LifeArea, ProjectStatus, filter_active
from .core.reading import READING_CATEGORIES, READING_TYPES
from .core.strategy import DAY_NAMES, ProjectDraft, StrategyWorksheet
from .core.timelog import TimeType
from .core.weekly import start_of_week
from .workflows import (
    add_activity,
    add_memo,
    add_project,
    add_reading,
    add_session_note,
    add_task,
    complete_strategy_session,
    complete_task,
    current_time,
    dashboard_overview,
    get_stores,
    log_activity,
    log_reading,
    log_time,
    plan_projects,
    set_project_status,
    strategy_status,
    today_sessions,
    toggle_agenda_item,
    weekly_report,
)

TIME_TYPES = [t.value for t in TimeType]


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _context():
    config = load_config()
    return config, get_stores(config)


@click.group()
@click.version_option(package_name="weekwise")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Weekwise - projects, pomodoros and the weekly strategy ritual."""
    config = load_config()
    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )


# ============== Projects ==============


@main.group()
def projects():
    """Manage projects and their tasks."""
    pass


@projects.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include planning and completed projects")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def projects_list(show_all: bool, as_json: bool):
    """List active projects."""
    _, stores = _context()
    items = stores.projects.list_projects()
    if not show_all:
        items = filter_active(items)

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in items], indent=2))
        return

    if not items:
        click.echo("No active projects found.")
        return

    for p in items:
        done, total = p.task_progress()
        status = f" [{p.status}]" if show_all and p.status else ""
        click.echo(f"{p.name}{status} ({p.life_area}) - {done}/{total} tasks")


@projects.command("add")
@click.argument("name")
@click.option(
    "--area",
    "life_area",
    type=click.Choice([a.value for a in LifeArea]),
    default=LifeArea.WORK.value,
    help="Life area",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in ProjectStatus]),
    default=ProjectStatus.ACTIVE.value,
)
@click.option("--description", default="", help="What the project is for")
def projects_add(name: str, life_area: str, status: str, description: str):
    """Create a project."""
    _, stores = _context()
    try:
        project = add_project(stores, name, life_area, status, description)
    except ValueError as e:
        _fail(e)
    click.echo(f"✓ Created project '{project.name}' ({project.life_area})")


@projects.command("add-task")
@click.argument("project")
@click.argument("name")
@click.option("--estimate", type=float, default=0.0, help="Estimated hours")
def projects_add_task(project: str, name: str, estimate: float):
    """Add a task to a project."""
    _, stores = _context()
    try:
        task = add_task(stores, project, name, estimate)
    except (ValueError, LookupError) as e:
        _fail(e)
    click.echo(f"✓ Added task '{task.name}'")


@projects.command("done")
@click.argument("project")
@click.argument("task")
def projects_done(project: str, task: str):
    """Mark a project task complete."""
    _, stores = _context()
    try:
        completed = complete_task(stores, project, task)
    except (ValueError, LookupError) as e:
        _fail(e)
    click.echo(f"✓ Completed '{completed.name}'")


@projects.command("status")
@click.argument("project")
@click.argument("status", type=click.Choice([s.value for s in ProjectStatus]))
def projects_status(project: str, status: str):
    """Move a project to planning, active or completed."""
    _, stores = _context()
    try:
        updated = set_project_status(stores, project, status)
    except (ValueError, LookupError) as e:
        _fail(e)
    click.echo(f"✓ '{updated.name}' is now {updated.status}")


# ============== Time ==============


@main.command("log")
@click.argument("task")
@click.argument("minutes", type=int)
@click.option("--type", "time_type", type=click.Choice(TIME_TYPES), default="invested")
@click.option("--project", "-p", default=None, help="Project name")
def log_cmd(task: str, minutes: int, time_type: str, project: str | None):
    """Log MINUTES of time against TASK."""
    config, stores = _context()
    try:
        entry = log_time(stores, task, minutes, time_type, current_time(config), project)
    except ValueError as e:
        _fail(e)
    where = f" on {entry.project}" if entry.project else ""
    click.echo(f"✓ Logged {format_minutes(entry.duration)} {entry.type.value}{where}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--show-unmatched", is_flag=True, help="List logs that match no active project")
def week(as_json: bool, show_unmatched: bool):
    """Active projects - this week's hours (Mon-Sun)."""
    config, stores = _context()
    report = weekly_report(stores, current_time(config))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "weekStart": report.week_start.isoformat(),
                    "projects": [s.to_dict() for s in report.summaries],
                    "unmatched": [log.to_dict() for log in report.unmatched],
                },
                indent=2,
            )
        )
        return

    if not report.summaries:
        click.echo("No active projects found.")
        click.echo("Create projects to start tracking time!")
        return

    click.echo(f"Week of {report.week_start.strftime('%A, %B %d')}\n")
    for s in report.summaries:
        done, total = s.project.task_progress()
        click.echo(f"{s.project.name} ({s.project.life_area})")
        click.echo(
            f"  {format_hours(s.total_hours)} this week"
            f" | invested {format_hours(s.invested_hours)}"
            f" | spent {format_hours(s.spent_hours)}"
            f" | {done}/{total} tasks"
        )
        for e in s.task_entries:
            click.echo(f"    - {e.task_name} ({e.type.value}): {format_hours(e.duration)}")

    if show_unmatched and report.unmatched:
        click.echo(f"\n{len(report.unmatched)} log(s) this week match no active project:")
        for log in report.unmatched:
            click.echo(f"  - {log.task} [{log.project or 'no project'}] {format_minutes(log.duration)}")


@main.command()
def today():
    """Today's sessions, combined by task."""
    config, stores = _context()
    sessions, stats = today_sessions(stores, current_time(config))

    click.echo(
        f"Today: {format_minutes(stats.total_minutes)} total, "
        f"{format_minutes(stats.invested_minutes)} invested, "
        f"{format_minutes(stats.spent_minutes)} spent\n"
    )
    if not sessions:
        click.echo("No sessions logged today yet.")
        return

    for s in sessions:
        count = f" {s.count}x" if s.count > 1 else ""
        project = f" ({s.project})" if s.project else ""
        click.echo(f"  [{s.type.value:8}] {s.task}{project}{count} - {format_minutes(s.total_minutes)}")


@main.command()
@click.option("--minutes", "-m", type=int, default=None, help=f"Session length (presets: {PRESETS})")
@click.option("--project", "-p", required=True, help="Project to log the session against")
@click.option("--task", "-t", default="", help="Task name")
@click.option("--type", "time_type", type=click.Choice(TIME_TYPES), default="invested")
def timer(minutes: int | None, project: str, task: str, time_type: str):
    """Run a pomodoro and log it when it ends (Ctrl+C to stop early)."""
    config, stores = _context()
    try:
        pomodoro = PomodoroTimer(minutes=minutes or config.pomodoro_minutes)
        pomodoro.start(current_time(config), project=project, task=task, time_type=time_type)
    except ValueError as e:
        _fail(e)

    click.echo(f"Pomodoro: {pomodoro.minutes} min on {project} ({time_type})")
    try:
        while not pomodoro.is_finished(current_time(config)):
            click.echo(f"\r  {format_clock(pomodoro.remaining(current_time(config)))}", nl=False)
            time.sleep(1)
        entry = pomodoro.complete(current_time(config))
        click.echo("\r  00:00")
    except KeyboardInterrupt:
        entry = pomodoro.stop(current_time(config))
        click.echo()
        if entry is None:
            click.echo("Stopped before a full minute - nothing logged.")
            return

    logged = log_time(stores, entry.task, entry.duration, entry.type, entry.timestamp, entry.project)
    click.echo(f"✓ Logged {format_minutes(logged.duration)} {logged.type.value} on {logged.project}")


@main.command()
def dashboard():
    """This week at a glance."""
    config, stores = _context()
    now = current_time(config)
    overview = dashboard_overview(stores, now)
    status = strategy_status(stores, now)
    active = filter_active(stores.projects.list_projects())

    click.echo(f"Week of {start_of_week(now).strftime('%A, %B %d')}\n")
    click.echo(f"Invested: {format_hours(overview.invested)}")
    click.echo(f"  projects {format_hours(overview.time_log_invested)}"
               f", leisure {format_hours(overview.leisure_hours)}"
               f", reading {format_hours(overview.reading_hours)}")
    click.echo(f"Spent:    {format_hours(overview.spent)}")
    click.echo(f"Active projects: {len(active)}")

    if status.days_until == 0:
        click.echo(f"Strategy session: Due Today ({status.strategy_day})")
    else:
        click.echo(f"Strategy session: {status.next_date.isoformat()} (in {status.days_until}d)")


# ============== Reading ==============


@main.group()
def reading():
    """Books, podcasts and articles."""
    pass


@reading.command("add")
@click.argument("title")
@click.option("--author", default="")
@click.option("--type", "item_type", type=click.Choice(READING_TYPES), default="book")
@click.option("--category", type=click.Choice(READING_CATEGORIES), default="productivity")
def reading_add(title: str, author: str, item_type: str, category: str):
    """Add something to read."""
    _, stores = _context()
    try:
        entry = add_reading(stores, title, author, item_type, category)
    except ValueError as e:
        _fail(e)
    click.echo(f"✓ Added {entry.type} '{entry.title}'")


@reading.command("log")
@click.argument("title")
@click.argument("minutes", type=int)
@click.option("--pages", type=int, default=None)
@click.option("--notes", default="")
def reading_log(title: str, minutes: int, pages: int | None, notes: str):
    """Log a reading session."""
    config, stores = _context()
    try:
        log_reading(stores, title, minutes, current_time(config), pages, notes)
    except (ValueError, LookupError) as e:
        _fail(e)
    click.echo(f"✓ Logged {format_minutes(minutes)} of reading")


@reading.command("list")
def reading_list():
    """List reading items."""
    config, stores = _context()
    entries = stores.reading.list_reading()
    if not entries:
        click.echo("Nothing on the reading list.")
        return
    start = start_of_week(current_time(config))
    for e in entries:
        by = f" by {e.author}" if e.author else ""
        click.echo(
            f"{e.title}{by} [{e.type}, {e.category}]"
            f" - {format_hours(e.hours_since(start))} this week, {format_minutes(e.total_minutes)} total"
        )


# ============== Leisure ==============


@main.group()
def leisure():
    """Leisure activities and their intentions."""
    pass


@leisure.command("add")
@click.argument("name")
@click.option("--category", type=click.Choice(LEISURE_CATEGORIES), default="relaxation")
@click.option("--frequency", type=click.Choice(FREQUENCIES), default="weekly")
@click.option("--intention", default="", help="Why you do it")
@click.option("--target", "target_sessions", type=int, default=1, help="Sessions per period")
def leisure_add(name: str, category: str, frequency: str, intention: str, target_sessions: int):
    """Add a leisure activity."""
    _, stores = _context()
    try:
        activity = add_activity(stores, name, category, frequency, intention, target_sessions)
    except ValueError as e:
        _fail(e)
    click.echo(f"✓ Added '{activity.name}' ({activity.frequency})")


@leisure.command("log")
@click.argument("name")
@click.argument("minutes", type=int)
@click.option("--notes", default="")
def leisure_log(name: str, minutes: int, notes: str):
    """Log a leisure session."""
    config, stores = _context()
    try:
        log_activity(stores, name, minutes, current_time(config), notes)
    except (ValueError, LookupError) as e:
        _fail(e)
    click.echo(f"✓ Logged {format_minutes(minutes)} of {name}")


@leisure.command("list")
def leisure_list():
    """List leisure activities with this week's progress."""
    config, stores = _context()
    activities = stores.leisure.list_activities()
    if not activities:
        click.echo("No leisure activities yet.")
        return
    start = start_of_week(current_time(config))
    for a in activities:
        done = len(a.sessions_since(start))
        click.echo(f"{a.name} [{a.category}, {a.frequency}] {done}/{a.target_sessions} sessions, "
                   f"{format_hours(a.total_hours)} total")
        if a.intention:
            click.echo(f"  {a.intention}")


# ============== Voice Memos ==============


@main.group()
def memo():
    """Voice memo notes."""
    pass


@memo.command("add")
@click.argument("title")
@click.option("--text", "transcription", default="", help="Transcription")
@click.option("--seconds", "duration", type=int, default=0, help="Recording length")
@click.option("--tag", "tags", multiple=True)
@click.option("--project", "-p", default=None, help="Link to a project")
def memo_add(title: str, transcription: str, duration: int, tags: tuple[str, ...], project: str | None):
    """Record a memo."""
    config, stores = _context()
    m = add_memo(stores, title, current_time(config), transcription, duration, list(tags), project)
    link = f" → {m.linked_name}" if m.linked_name else ""
    click.echo(f"✓ Saved memo '{m.title}'{link}")


@memo.command("list")
@click.option("--tag", default=None)
@click.option("--project", "-p", default=None)
def memo_list(tag: str | None, project: str | None):
    """List memos, optionally by tag or linked project."""
    _, stores = _context()
    memos = stores.memos.list_memos()
    if tag:
        memos = filter_by_tag(memos, tag)
    if project:
        memos = memos_linked_to(memos, project)
    if not memos:
        click.echo("No memos.")
        return
    for m in memos:
        tags = f" #{' #'.join(m.tags)}" if m.tags else ""
        click.echo(f"{m.timestamp.strftime('%Y-%m-%d %H:%M')} {m.title} ({m.format_duration()}){tags}")
        if m.transcription:
            click.echo(f"  {m.transcription}")


# ============== Strategy ==============


@main.group()
def strategy():
    """The weekly strategy session."""
    pass


@strategy.command("status")
def strategy_status_cmd():
    """Show this week's agenda and progress."""
    config, stores = _context()
    status = strategy_status(stores, current_time(config))

    due = "due today" if status.is_due else f"next on {status.next_date.isoformat()}"
    click.echo(f"Strategy session {status.session.id} ({status.strategy_day}, {due})")
    click.echo(f"Progress: {status.progress}%\n")
    for item in status.agenda:
        mark = "x" if item.id in status.session.completed_items else " "
        click.echo(f"[{mark}] {item.id}: {item.title}")
        note = status.session.notes.get(item.id)
        if note:
            click.echo(f"      {note}")


@strategy.command("check")
@click.argument("item_id")
def strategy_check(item_id: str):
    """Toggle an agenda item."""
    config, stores = _context()
    try:
        done = toggle_agenda_item(stores, item_id, current_time(config))
    except LookupError as e:
        _fail(e)
    click.echo(f"{'✓ Checked' if done else '○ Unchecked'} {item_id}")


@strategy.command("note")
@click.argument("item_id")
@click.argument("text")
def strategy_note(item_id: str, text: str):
    """Attach a note to an agenda item."""
    config, stores = _context()
    add_session_note(stores, item_id, text, current_time(config))
    click.echo(f"✓ Note saved for {item_id}")


@strategy.command("complete")
def strategy_complete():
    """Finish this week's session."""
    config, stores = _context()
    session = complete_strategy_session(stores, current_time(config))
    click.echo(f"✓ Strategy session {session.id} complete")


@strategy.command("plan")
@click.option("--dissatisfaction", "-d", "dissatisfactions", multiple=True, help="What bothers you right now")
@click.option("--hypothesis", "hypotheses", multiple=True, help="What might fix it")
@click.option("--project", "-p", "names", multiple=True, required=True, help="Project to plan")
@click.option(
    "--area",
    "life_area",
    type=click.Choice([a.value for a in LifeArea]),
    default=LifeArea.WORK.value,
    help="Life area for the planned projects",
)
def strategy_plan(
    dissatisfactions: tuple[str, ...], hypotheses: tuple[str, ...], names: tuple[str, ...], life_area: str
):
    """Turn dissatisfactions and hypotheses into planned projects."""
    _, stores = _context()
    worksheet = StrategyWorksheet(
        dissatisfactions=[d.strip() for d in dissatisfactions if d.strip()],
        hypotheses=[h.strip() for h in hypotheses if h.strip()],
        projects=[ProjectDraft(name=name, life_area=life_area) for name in names],
    )
    try:
        planned = plan_projects(stores, worksheet)
    except ValueError as e:
        _fail(e)
    for project in planned:
        click.echo(f"✓ Planned '{project.name}' ({project.life_area})")


@strategy.command("day")
@click.argument("day", type=click.Choice(DAY_NAMES, case_sensitive=False))
def strategy_day(day: str):
    """Set the weekday for strategy sessions."""
    _, stores = _context()
    stores.strategy.save_strategy_day(day.capitalize())
    click.echo(f"✓ Strategy sessions are now on {day.capitalize()}")


if __name__ == "__main__":
    main()
