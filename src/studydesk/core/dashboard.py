"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime

from .schedule import ClassSession, day_index, day_name, format_session_line, sessions_for_day, tomorrow_index
from .state import AppState
from .tasks import Priority, Task, View, pending_count, priority_counts


@dataclass
class DashboardData:
    """Assembled dashboard figures ready for formatting."""

    date: date
    day_of_week: str
    pending: int
    by_priority: dict[Priority, int]
    classes_today: list[ClassSession]
    view: View
    sub_filter: str | None
    tasks: list[Task]


def assemble_dashboard(state: AppState, schedule: list[ClassSession], now: datetime) -> DashboardData:
    """
    Assemble the dashboard from state and the weekly schedule.

    Pure function - no I/O.
    """
    today = now.date()
    tasks = list(state.tasks)
    return DashboardData(
        date=today,
        day_of_week=today.strftime("%A"),
        pending=pending_count(tasks),
        by_priority=priority_counts(tasks),
        classes_today=sessions_for_day(schedule, day_index(today)),
        view=state.view,
        sub_filter=state.sub_filter,
        tasks=state.visible(),
    )


def format_task_line(task: Task) -> str:
    """Format a single task for display."""
    tag = task.subject or (task.category.value if task.category else None)
    subject = f" [{tag}]" if tag else ""
    check = "x" if task.completed else " "
    return f"[{check}] {task.id}  {task.priority.value:6} {task.title}{subject} (due {task.due:%Y-%m-%d %H:%M})"


def format_dashboard(data: DashboardData) -> str:
    high = data.by_priority[Priority.HIGH]
    medium = data.by_priority[Priority.MEDIUM]
    low = data.by_priority[Priority.LOW]
    classes = "\n".join(format_session_line(s) for s in data.classes_today) or "Free day. Make the most of it!"
    return (
        f"{data.day_of_week}, {data.date.strftime('%B %d')}\n"
        f"Pending tasks: {data.pending} ({high} high, {medium} medium, {low} low)\n"
        f"Classes today: {len(data.classes_today)}\n"
        f"{classes}"
    )


# ============== Quick actions ==============


def tomorrow_classes_message(schedule: list[ClassSession], today: date) -> str:
    tomorrow = tomorrow_index(day_index(today))
    name = day_name(tomorrow)
    classes = sessions_for_day(schedule, tomorrow)
    if not classes:
        return f"Good news! You have no classes scheduled tomorrow ({name})."
    class_list = ", ".join(f"{c.subject} ({c.start_time})" for c in classes)
    return f"Tomorrow ({name}) you have: {class_list}."


def pending_summary_message(tasks: list[Task]) -> str:
    pending = pending_count(tasks)
    if pending == 0:
        return "All clear! You have no pending tasks right now."
    counts = priority_counts(tasks)
    return (
        f"Pending summary: {pending} in total "
        f"({counts[Priority.HIGH]} high, {counts[Priority.MEDIUM]} medium, {counts[Priority.LOW]} low)."
    )


def mentoring_hours_message(slot: ClassSession) -> str:
    return (
        f"Your {slot.subject.lower()} hours are "
        f"{day_name(slot.day_of_week)} from {slot.start_time} to {slot.end_time}."
    )
