"""Structured responses from the language-model collaborator."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .tasks import Priority, TaskKind


class Intent(Enum):
    ADD_TASK = "ADD_TASK"
    ADD_MENTORING = "ADD_MENTORING"
    QUERY = "QUERY"
    CHAT = "CHAT"
    UNKNOWN = "UNKNOWN"


class SuggestionCategory(Enum):
    STUDY = "STUDY"
    REST = "REST"
    PRIORITY = "PRIORITY"
    GENERAL = "GENERAL"


def _enum_or(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class TaskDraft:
    """Task-like fields extracted from free text. Everything but title may be missing."""

    title: str
    kind: TaskKind = TaskKind.OTHER
    priority: Priority = Priority.MEDIUM
    due: datetime | None = None
    description: str | None = None
    subject: str | None = None

    @classmethod
    def from_api(cls, data: dict, subjects: list[str]) -> "TaskDraft | None":
        """Create TaskDraft from a parse response, or None without a title."""
        title = (data.get("title") or "").strip()
        if not title:
            return None
        due = None
        if data.get("dueDate"):
            try:
                due = datetime.fromisoformat(data["dueDate"])
            except ValueError:
                due = None
        # The model answers "Other" when no known subject applies
        subject = data.get("subject")
        return cls(
            title=title,
            kind=_enum_or(TaskKind, data.get("type"), TaskKind.OTHER),
            priority=_enum_or(Priority, data.get("priority"), Priority.MEDIUM),
            due=due,
            description=data.get("description") or None,
            subject=subject if subject in subjects else None,
        )


@dataclass(frozen=True)
class ParsedInput:
    intent: Intent
    message: str
    task: TaskDraft | None = None
    mentoring_topic: str | None = None

    @classmethod
    def from_api(cls, data: dict, subjects: list[str]) -> "ParsedInput":
        details = data.get("taskDetails") or {}
        return cls(
            intent=_enum_or(Intent, data.get("intent"), Intent.UNKNOWN),
            message=data.get("responseMessage") or "",
            task=TaskDraft.from_api(details, subjects) if details else None,
            mentoring_topic=(data.get("mentoringTopic") or "").strip() or None,
        )


@dataclass(frozen=True)
class Suggestion:
    text: str
    category: SuggestionCategory = SuggestionCategory.GENERAL

    @classmethod
    def from_api(cls, data: dict) -> "Suggestion":
        return cls(
            text=data.get("suggestionText") or "",
            category=_enum_or(SuggestionCategory, data.get("category"), SuggestionCategory.GENERAL),
        )
