"""studydesk CLI - personal study assistant."""

import json
import logging
import sys

import click

from .core.capture import CaptureFlow, CaptureState, MentoringSubtype, RecordKind
from .core.dashboard import (
    format_dashboard,
    format_task_line,
    mentoring_hours_message,
    pending_summary_message,
    tomorrow_classes_message,
)
from .core.history import HistoryCategory
from .core.reference import MENTORING_SLOT, SUBJECTS
from .core.schedule import day_index, day_name, format_session_line, sessions_for_day, tomorrow_index, week_grid
from .core.state import SetSubFilter, SwitchView
from .core.tasks import PersonalCategory, Priority, View, personal_by_category
from .workflows import open_dashboard

PRIORITY_CHOICE = click.Choice([p.value.lower() for p in Priority], case_sensitive=False)
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])
TIME_TYPE = click.DateTime(formats=["%H:%M"])
CATEGORY_CHOICE = click.Choice([c.value.lower() for c in PersonalCategory], case_sensitive=False)

KIND_CHOICES = {
    "task": RecordKind.TASK,
    "meeting": RecordKind.MEETING,
    "question": RecordKind.QUESTION,
    "mentoring": RecordKind.MENTORING_ENTRY,
}


def _capture(dashboard, kind: RecordKind, **fields) -> None:
    """Run one pass of the capture flow with pre-filled fields and apply the result."""
    flow = CaptureFlow()
    flow.open()
    flow.choose(kind)
    for name, value in fields.items():
        setattr(flow.fields, name, value)

    payload = flow.submit(busy=dashboard.busy, now=dashboard.now())
    if payload is None:
        click.echo("Error: missing required fields.", err=True)
        sys.exit(1)
    click.echo(dashboard.submit(payload))


@click.group()
@click.version_option(package_name="studydesk")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """studydesk - Personal study assistant CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.obj = open_dashboard()


def _echo_week(schedule) -> None:
    for index, sessions in week_grid(schedule).items():
        if not sessions:
            continue
        click.echo(f"### {day_name(index)}")
        for session in sessions:
            click.echo(f"  {format_session_line(session)}")


def _echo_personal(dashboard, as_json: bool) -> None:
    groups = personal_by_category(list(dashboard.state.tasks))

    if as_json:
        data = {category.value: [t.to_dict() for t in items] for category, items in groups.items()}
        click.echo(json.dumps(data, indent=2))
        return

    if not groups:
        click.echo("No personal tasks pending.")
        return

    for category, items in groups.items():
        click.echo(f"### {category.value} ({len(items)})")
        for task in items:
            click.echo(format_task_line(task))


@main.command()
@click.option(
    "--view",
    type=click.Choice([v.value for v in View]),
    default=View.PRIORITY.value,
    help="How to list tasks",
)
@click.option("--filter", "sub_filter", default=None, help="Priority (high/medium/low) or subject name")
@click.option("--personal", is_flag=True, help="List personal tasks grouped by category")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def tasks(dashboard, view: str, sub_filter: str | None, personal: bool, as_json: bool):
    """List pending tasks."""
    if personal:
        _echo_personal(dashboard, as_json)
        return

    dashboard.dispatch(SwitchView(View(view)))
    if sub_filter is not None and View(view) is View.PRIORITY:
        sub_filter = sub_filter.upper()
    dashboard.dispatch(SetSubFilter(sub_filter))
    visible = dashboard.state.visible()

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in visible], indent=2))
        return

    # The calendar view shows the class week instead of the task list
    if dashboard.state.view is View.CALENDAR:
        _echo_week(dashboard.schedule)
        return

    if not visible:
        if sub_filter:
            click.echo("No tasks match this filter.")
        else:
            click.echo("All caught up! Nothing pending.")
        return

    heading = f"Filtered: {sub_filter}" if sub_filter else "Full list"
    click.echo(f"{heading} ({len(visible)})")
    for task in visible:
        click.echo(format_task_line(task))


@main.command()
@click.argument("title")
@click.option("--subject", type=click.Choice(SUBJECTS), default=None, help="Linked subject")
@click.option("--priority", type=PRIORITY_CHOICE, default="medium", help="Task priority")
@click.option("--date", "due", type=DATE_TYPE, default=None, help="Due date (YYYY-MM-DD), defaults to now")
@click.option("--personal", is_flag=True, help="Personal task, filed under --category (default other)")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Personal category, implies --personal")
@click.pass_obj
def add(dashboard, title: str, subject: str | None, priority: str, due, personal: bool, category: str | None):
    """Add a task."""
    if category is not None or personal:
        if subject:
            click.echo("Error: a personal task cannot have a subject.", err=True)
            sys.exit(1)
        category = PersonalCategory((category or PersonalCategory.OTHER.value).capitalize())

    _capture(
        dashboard,
        RecordKind.TASK,
        description=title,
        subject=subject or "",
        priority=Priority(priority.upper()),
        date=due.date().isoformat() if due else "",
        category=category,
    )


@main.command()
@click.argument("title")
@click.option("--date", "day", type=DATE_TYPE, required=True, help="Meeting date (YYYY-MM-DD)")
@click.option("--time", "at", type=TIME_TYPE, required=True, help="Meeting time (HH:MM)")
@click.pass_obj
def meeting(dashboard, title: str, day, at):
    """Schedule a meeting."""
    _capture(
        dashboard,
        RecordKind.MEETING,
        description=title,
        date=day.date().isoformat(),
        time=at.strftime("%H:%M"),
    )


@main.command()
@click.argument("question")
@click.pass_obj
def ask(dashboard, question: str):
    """Ask the assistant, or describe a task in plain words."""
    _capture(dashboard, RecordKind.QUESTION, description=question)


@main.group()
def mentor():
    """Mentoring topics and sessions."""
    pass


@mentor.command("add")
@click.argument("title")
@click.option(
    "--type",
    "subtype",
    type=click.Choice([s.value.lower() for s in MentoringSubtype]),
    default="topic",
    help="Topic to prepare, session date, or workshop",
)
@click.option("--date", "day", type=DATE_TYPE, required=True, help="Date (YYYY-MM-DD)")
@click.option("--time", "at", type=TIME_TYPE, required=True, help="Time (HH:MM)")
@click.option("--students", default="", help="Who the topic is for, e.g. a group name")
@click.pass_obj
def mentor_add(dashboard, title: str, subtype: str, day, at, students: str):
    """Add a mentoring topic, session or workshop."""
    _capture(
        dashboard,
        RecordKind.MENTORING_ENTRY,
        description=title,
        mentoring_subtype=MentoringSubtype(subtype.upper()),
        date=day.date().isoformat(),
        time=at.strftime("%H:%M"),
        students=students,
    )


@mentor.command("list")
@click.pass_obj
def mentor_list(dashboard):
    """List mentoring topics."""
    if not dashboard.state.topics:
        click.echo("No mentoring topics yet.")
        return
    for topic in dashboard.state.topics:
        students = f" ({topic.students})" if topic.students else ""
        notes = f" - {topic.notes}" if topic.notes else ""
        click.echo(f"{topic.id}  {topic.status.label:11} {topic.title}{students}{notes}")


@mentor.command("cycle")
@click.argument("topic_id")
@click.pass_obj
def mentor_cycle(dashboard, topic_id: str):
    """Advance a topic to its next status."""
    topic = dashboard.cycle_topic(topic_id)
    if topic is None:
        click.echo(f"Error: no single topic matches '{topic_id}'", err=True)
        sys.exit(1)
    click.echo(f"{topic.title}: {topic.status.label}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def toggle(dashboard, task_id: str):
    """Mark a task done, or not done again."""
    task = dashboard.toggle(task_id)
    if task is None:
        click.echo(f"Error: no single task matches '{task_id}'", err=True)
        sys.exit(1)
    state = "done" if task.completed else "pending"
    click.echo(f"{task.title}: {state}")


@main.command()
@click.argument("title")
@click.option(
    "--category",
    type=click.Choice([c.value.lower() for c in HistoryCategory]),
    default="personal",
    help="Area the activity counts towards",
)
@click.option("--details", default=None, help="Extra detail, e.g. a grade")
@click.pass_obj
def log(dashboard, title: str, category: str, details: str | None):
    """Record an activity finished outside the task list."""
    try:
        item = dashboard.record(title, HistoryCategory(category.upper()), details)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Logged: {item.title} ({category})")


@main.command()
@click.pass_obj
def capture(dashboard):
    """Interactively capture a task, meeting, question or mentoring entry."""
    flow = CaptureFlow()
    flow.open()
    kind = click.prompt("What do you want to add?", type=click.Choice(list(KIND_CHOICES)))
    state = flow.choose(KIND_CHOICES[kind])
    f = flow.fields

    if state is CaptureState.FORM_QUESTION:
        f.description = click.prompt("Question", default="", show_default=False)
    else:
        f.description = click.prompt("Description", default="", show_default=False)

    if state is CaptureState.FORM_TASK:
        f.subject = click.prompt("Subject (blank for none)", default="", show_default=False)
        if not f.subject.strip():
            category = click.prompt(
                "Personal category (blank for none)",
                type=click.Choice([""] + [c.value.lower() for c in PersonalCategory], case_sensitive=False),
                default="",
                show_default=False,
                show_choices=False,
            )
            f.category = PersonalCategory(category.capitalize()) if category else None
        f.priority = Priority(click.prompt("Priority", type=PRIORITY_CHOICE, default="medium").upper())
        f.date = click.prompt("Due date (YYYY-MM-DD, blank for now)", default="", show_default=False)
    elif state is CaptureState.FORM_MENTORING:
        subtype = click.prompt(
            "Type",
            type=click.Choice([s.value.lower() for s in MentoringSubtype]),
            default="topic",
        )
        f.mentoring_subtype = MentoringSubtype(subtype.upper())
        if f.mentoring_subtype is MentoringSubtype.TOPIC:
            f.students = click.prompt("Students (blank for none)", default="", show_default=False)

    if state in (CaptureState.FORM_MEETING, CaptureState.FORM_MENTORING):
        f.date = click.prompt("Date (YYYY-MM-DD)", default="", show_default=False)
        f.time = click.prompt("Time (HH:MM)", default="", show_default=False)

    if not flow.can_submit():
        flow.cancel()
        click.echo("Error: missing required fields, nothing was saved.", err=True)
        sys.exit(1)

    payload = flow.submit(busy=dashboard.busy, now=dashboard.now())
    if payload is None:
        click.echo("Error: still busy with a previous request.", err=True)
        sys.exit(1)
    click.echo(dashboard.submit(payload))


@main.command()
@click.option("--day", type=click.IntRange(0, 6), default=None, help="Day index, 0=Sunday")
@click.option("--tomorrow", is_flag=True, help="Show tomorrow's classes")
@click.option("--week", is_flag=True, help="Show the whole week")
@click.pass_obj
def schedule(dashboard, day: int | None, tomorrow: bool, week: bool):
    """Show class sessions."""
    if week:
        _echo_week(dashboard.schedule)
        return

    if day is None:
        day = day_index(dashboard.now().date())
        if tomorrow:
            day = tomorrow_index(day)

    sessions = sessions_for_day(dashboard.schedule, day)
    if not sessions:
        click.echo(f"No classes on {day_name(day)}. Free day!")
        return
    click.echo(f"### {day_name(day)}")
    for session in sessions:
        click.echo(format_session_line(session))


@main.command()
@click.pass_obj
def summary(dashboard):
    """Today's figures and a pending-task summary."""
    click.echo(format_dashboard(dashboard.dashboard()))
    click.echo()
    click.echo(pending_summary_message(list(dashboard.state.tasks)))
    click.echo(tomorrow_classes_message(dashboard.schedule, dashboard.now().date()))


@main.command()
@click.pass_obj
def suggest(dashboard):
    """Get a suggestion for today."""
    result = dashboard.suggestion()
    click.echo(f"[{result.category.value}] {result.text}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def week(dashboard, as_json: bool):
    """Summarize the last seven days of completed activity."""
    data = dashboard.week()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "start": data.start.isoformat(),
                    "end": data.end.isoformat(),
                    "academic": data.academic,
                    "mentoring": data.mentoring,
                    "personal": data.personal,
                    "effectiveness": data.effectiveness,
                    "highlights": [h.to_dict() for h in data.highlights],
                },
                indent=2,
            )
        )
        return

    click.echo(f"Last week ({data.window_label})")
    click.echo(f"  Academic:   {data.academic}")
    click.echo(f"  Mentoring:  {data.mentoring}")
    click.echo(f"  Personal:   {data.personal}")
    click.echo(f"  Effectiveness: {data.effectiveness}%")
    if data.highlights:
        click.echo("\nHighlights:")
        for item in data.highlights:
            click.echo(f"  - {item.completed_at.strftime('%a')} {item.title} ({item.category.value.lower()})")


@main.command()
@click.pass_obj
def monitoring(dashboard):
    """Show mentoring office hours."""
    click.echo(mentoring_hours_message(MENTORING_SLOT))


if __name__ == "__main__":
    main()
