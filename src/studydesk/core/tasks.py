"""Pure task domain logic - no I/O dependencies."""

import secrets
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class TaskKind(Enum):
    ACADEMIC = "ACADEMIC"
    PERSONAL = "PERSONAL"
    MENTORING = "MENTORING"
    OTHER = "OTHER"


class Priority(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class PersonalCategory(Enum):
    """Life area of a personal task."""

    HOME = "Home"
    HEALTH = "Health"
    FINANCE = "Finance"
    SHOPPING = "Shopping"
    OTHER = "Other"


class View(Enum):
    """Which way the main task list is being looked at."""

    PRIORITY = "priority"
    SUBJECT = "subject"
    CALENDAR = "calendar"


@dataclass(frozen=True)
class Task:
    """A unit of work. Only `completed` changes after creation."""

    id: str
    title: str
    kind: TaskKind
    priority: Priority
    due: datetime
    completed: bool = False
    description: str | None = None
    subject: str | None = None
    category: PersonalCategory | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "kind": self.kind.value,
            "priority": self.priority.value,
            "due": self.due.isoformat(),
            "completed": self.completed,
            "description": self.description,
            "subject": self.subject,
            "category": self.category.value if self.category else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from its stored form."""
        return cls(
            id=data["id"],
            title=data["title"],
            kind=TaskKind(data.get("kind", TaskKind.OTHER.value)),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            due=datetime.fromisoformat(data["due"]),
            completed=bool(data.get("completed", False)),
            description=data.get("description"),
            subject=data.get("subject"),
            category=PersonalCategory(data["category"]) if data.get("category") else None,
        )


def new_id(existing_ids: set[str] | frozenset[str]) -> str:
    """Short random id that is not already taken."""
    while True:
        candidate = secrets.token_hex(4)
        if candidate not in existing_ids:
            return candidate


def create_task(
    title: str,
    existing_ids: set[str] | frozenset[str],
    *,
    kind: TaskKind = TaskKind.OTHER,
    priority: Priority | None = None,
    due: datetime | None = None,
    subject: str | None = None,
    description: str | None = None,
    category: PersonalCategory | None = None,
    now: datetime | None = None,
) -> Task:
    """
    Build a new incomplete task.

    A supplied subject makes the task ACADEMIC and a personal category makes it
    PERSONAL, regardless of `kind`. A task cannot carry both.
    """
    title = title.strip()
    if not title:
        raise ValueError("Task title must not be empty")
    if subject and category:
        raise ValueError("A task cannot have both a subject and a personal category")
    if subject:
        kind = TaskKind.ACADEMIC
    elif category:
        kind = TaskKind.PERSONAL
    return Task(
        id=new_id(existing_ids),
        title=title,
        kind=kind,
        priority=priority or Priority.MEDIUM,
        due=due or now or datetime.now(),
        description=description,
        subject=subject or None,
        category=category,
    )


def filter_pending(tasks: list[Task]) -> list[Task]:
    """Tasks not yet completed, in input order."""
    return [t for t in tasks if not t.completed]


def sort_by_priority(tasks: list[Task]) -> list[Task]:
    """
    Sort tasks by priority, highest first.

    Pure function - no I/O. The sort is stable: equal priorities keep their
    input order.
    """
    return sorted(tasks, key=lambda t: -t.priority.rank)


def filter_by_priority(tasks: list[Task], priority: Priority) -> list[Task]:
    return [t for t in tasks if t.priority is priority]


def filter_by_subject(tasks: list[Task], subject: str) -> list[Task]:
    """Exact, case-sensitive subject match."""
    return [t for t in tasks if t.subject == subject]


def _as_priority(value: str | None) -> Priority | None:
    try:
        return Priority(value)
    except ValueError:
        return None


def visible_tasks(tasks: list[Task], view: View, sub_filter: str | None = None) -> list[Task]:
    """
    The ordered tasks to show for a view and optional sub-filter.

    Pure function - no I/O.

    Completed tasks are never shown. The priority view only narrows on a
    priority value and always sorts by rank; the subject view narrows on an
    exact subject and keeps input order. The calendar view does not list tasks,
    so it passes the pending set through untouched.
    """
    pending = filter_pending(tasks)

    if view is View.PRIORITY:
        priority = _as_priority(sub_filter) if sub_filter is not None else None
        if priority is not None:
            pending = filter_by_priority(pending, priority)
        return sort_by_priority(pending)

    if view is View.SUBJECT:
        if sub_filter is not None:
            pending = filter_by_subject(pending, sub_filter)
        return pending

    return pending


def pending_count(tasks: list[Task]) -> int:
    return sum(1 for t in tasks if not t.completed)


def priority_counts(tasks: list[Task]) -> dict[Priority, int]:
    """Incomplete tasks per priority; every priority is present."""
    counts = {p: 0 for p in Priority}
    for t in filter_pending(tasks):
        counts[t.priority] += 1
    return counts


def personal_by_category(tasks: list[Task]) -> dict[PersonalCategory, list[Task]]:
    """
    Pending categorized tasks grouped by life area.

    Pure function - no I/O. Groups follow PersonalCategory order, empty ones
    are left out, and each group is sorted by priority.
    """
    pending = [t for t in filter_pending(tasks) if t.category is not None]
    groups = {}
    for category in PersonalCategory:
        in_group = [t for t in pending if t.category is category]
        if in_group:
            groups[category] = sort_by_priority(in_group)
    return groups


def toggle_task(tasks: list[Task], task_id: str) -> list[Task]:
    """Flip `completed` on the task with `task_id`; everything else is untouched."""
    return [replace(t, completed=not t.completed) if t.id == task_id else t for t in tasks]


def find_by_id(items: list, key: str):
    """
    Look an item up by id or unique id prefix.

    An exact id always wins over prefix matches. Returns None when nothing or
    more than one item matches.
    """
    exact = next((item for item in items if item.id == key), None)
    if exact is not None:
        return exact
    matches = [item for item in items if item.id.startswith(key)]
    return matches[0] if len(matches) == 1 else None
