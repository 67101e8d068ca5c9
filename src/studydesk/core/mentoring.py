"""Mentoring topics and their status cycle."""

from dataclasses import dataclass, replace
from enum import Enum

from .tasks import new_id


class TopicStatus(Enum):
    PREPARED = "PREPARED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    TopicStatus.PREPARED: "READY",
    TopicStatus.IN_PROGRESS: "IN PROGRESS",
    TopicStatus.COMPLETED: "DONE",
}

_NEXT = {
    TopicStatus.PREPARED: TopicStatus.IN_PROGRESS,
    TopicStatus.IN_PROGRESS: TopicStatus.COMPLETED,
    TopicStatus.COMPLETED: TopicStatus.PREPARED,
}


@dataclass(frozen=True)
class MentoringTopic:
    """A topic prepared for a mentoring session."""

    id: str
    title: str
    status: TopicStatus = TopicStatus.PREPARED
    students: str | None = None
    notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "students": self.students,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MentoringTopic":
        return cls(
            id=data["id"],
            title=data["title"],
            status=TopicStatus(data.get("status", TopicStatus.PREPARED.value)),
            students=data.get("students"),
            notes=data.get("notes"),
        )


def advance(topic: MentoringTopic) -> MentoringTopic:
    """Move to the next status: PREPARED -> IN_PROGRESS -> COMPLETED -> PREPARED."""
    return replace(topic, status=_NEXT[topic.status])


def create_topic(
    title: str,
    existing_ids: set[str] | frozenset[str],
    *,
    students: str | None = None,
    notes: str | None = None,
) -> MentoringTopic:
    title = title.strip()
    if not title:
        raise ValueError("Topic title must not be empty")
    return MentoringTopic(id=new_id(existing_ids), title=title, students=students, notes=notes)


def cycle_topic(topics: list[MentoringTopic], topic_id: str) -> list[MentoringTopic]:
    """Advance the topic with `topic_id`; other topics are untouched."""
    return [advance(t) if t.id == topic_id else t for t in topics]
