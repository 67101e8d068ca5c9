"""Functional core - pure business logic with no I/O."""

from .tasks import (
    Task,
    TaskKind,
    Priority,
    PersonalCategory,
    View,
    visible_tasks,
    pending_count,
    priority_counts,
    personal_by_category,
    toggle_task,
    find_by_id,
)
from .schedule import ClassSession, sessions_for_day, tomorrow_index, day_index
from .mentoring import MentoringTopic, TopicStatus, advance
from .history import HistoryItem, HistoryCategory, WeeklySummary, summarize_week
from .capture import CaptureFlow, CaptureState, RecordKind, InputPayload
from .state import AppState, reduce
from .dashboard import DashboardData, assemble_dashboard

__all__ = [
    # Tasks
    "Task",
    "TaskKind",
    "Priority",
    "PersonalCategory",
    "View",
    "visible_tasks",
    "pending_count",
    "priority_counts",
    "personal_by_category",
    "toggle_task",
    "find_by_id",
    # Schedule
    "ClassSession",
    "sessions_for_day",
    "tomorrow_index",
    "day_index",
    # Mentoring
    "MentoringTopic",
    "TopicStatus",
    "advance",
    # History
    "HistoryItem",
    "HistoryCategory",
    "WeeklySummary",
    "summarize_week",
    # Capture
    "CaptureFlow",
    "CaptureState",
    "RecordKind",
    "InputPayload",
    # State
    "AppState",
    "reduce",
    # Dashboard
    "DashboardData",
    "assemble_dashboard",
]
