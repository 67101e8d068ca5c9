"""Application state container and its reducer."""

from dataclasses import dataclass, replace
from datetime import datetime

from .history import HistoryCategory, HistoryItem
from .mentoring import MentoringTopic, TopicStatus, cycle_topic
from .tasks import Task, TaskKind, View, toggle_task, visible_tasks


@dataclass(frozen=True)
class AppState:
    """Everything the dashboard owns. Replaced, never mutated."""

    tasks: tuple[Task, ...] = ()
    topics: tuple[MentoringTopic, ...] = ()
    history: tuple[HistoryItem, ...] = ()
    view: View = View.PRIORITY
    sub_filter: str | None = None

    def visible(self) -> list[Task]:
        return visible_tasks(list(self.tasks), self.view, self.sub_filter)

    def ids(self) -> frozenset[str]:
        """Every id in use, across all collections."""
        return frozenset(
            [t.id for t in self.tasks] + [t.id for t in self.topics] + [h.id for h in self.history]
        )


# ============== Actions ==============


@dataclass(frozen=True)
class AddTask:
    task: Task


@dataclass(frozen=True)
class ToggleTask:
    task_id: str
    at: datetime


@dataclass(frozen=True)
class AddTopic:
    topic: MentoringTopic


@dataclass(frozen=True)
class CycleTopic:
    topic_id: str
    at: datetime


@dataclass(frozen=True)
class RecordHistory:
    item: HistoryItem


@dataclass(frozen=True)
class SwitchView:
    view: View


@dataclass(frozen=True)
class SetSubFilter:
    value: str | None


Action = AddTask | ToggleTask | AddTopic | CycleTopic | RecordHistory | SwitchView | SetSubFilter


_CATEGORY_FOR_KIND = {
    TaskKind.ACADEMIC: HistoryCategory.ACADEMIC,
    TaskKind.MENTORING: HistoryCategory.MENTORING,
    TaskKind.PERSONAL: HistoryCategory.PERSONAL,
    TaskKind.OTHER: HistoryCategory.PERSONAL,
}


def history_category(kind: TaskKind) -> HistoryCategory:
    return _CATEGORY_FOR_KIND[kind]


def _history_id(state: AppState, source_id: str) -> str:
    return f"h-{source_id}-{len(state.history)}"


def _toggle(state: AppState, task_id: str, at: datetime) -> AppState:
    task = next((t for t in state.tasks if t.id == task_id), None)
    if task is None:
        return state

    new_state = replace(state, tasks=tuple(toggle_task(list(state.tasks), task_id)))
    if task.completed:
        # Reopening a task leaves its history entry in place
        return new_state

    item = HistoryItem(
        id=_history_id(state, task.id),
        title=task.title,
        category=history_category(task.kind),
        completed_at=at,
        details=task.subject,
    )
    return replace(new_state, history=new_state.history + (item,))


def _cycle(state: AppState, topic_id: str, at: datetime) -> AppState:
    if not any(t.id == topic_id for t in state.topics):
        return state

    topics = tuple(cycle_topic(list(state.topics), topic_id))
    new_state = replace(state, topics=topics)
    topic = next(t for t in topics if t.id == topic_id)
    if topic.status is not TopicStatus.COMPLETED:
        return new_state

    item = HistoryItem(
        id=_history_id(state, topic.id),
        title=topic.title,
        category=HistoryCategory.MENTORING,
        completed_at=at,
        details=topic.students,
    )
    return replace(new_state, history=new_state.history + (item,))


def reduce(state: AppState, action: Action) -> AppState:
    """
    Apply one action and return the resulting state.

    Pure function - no I/O. Actions naming an unknown id leave the state as is.
    """
    match action:
        case AddTask(task=task):
            return replace(state, tasks=state.tasks + (task,))
        case ToggleTask(task_id=task_id, at=at):
            return _toggle(state, task_id, at)
        case AddTopic(topic=topic):
            return replace(state, topics=state.topics + (topic,))
        case CycleTopic(topic_id=topic_id, at=at):
            return _cycle(state, topic_id, at)
        case RecordHistory(item=item):
            return replace(state, history=state.history + (item,))
        case SwitchView(view=view):
            return replace(state, view=view, sub_filter=None)
        case SetSubFilter(value=value):
            return replace(state, sub_filter=value)
    raise TypeError(f"Unknown action: {action!r}")
