"""Retrospective history of completed activities and the weekly summary."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

HIGHLIGHT_LIMIT = 8
WINDOW = timedelta(days=7)


class HistoryCategory(Enum):
    ACADEMIC = "ACADEMIC"
    MENTORING = "MENTORING"
    PERSONAL = "PERSONAL"


@dataclass(frozen=True)
class HistoryItem:
    """A completed activity. Never changes once recorded."""

    id: str
    title: str
    category: HistoryCategory
    completed_at: datetime
    details: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "completed_at": self.completed_at.isoformat(),
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryItem":
        return cls(
            id=data["id"],
            title=data["title"],
            category=HistoryCategory(data["category"]),
            completed_at=datetime.fromisoformat(data["completed_at"]),
            details=data.get("details"),
        )


@dataclass
class WeeklySummary:
    """Aggregated activity over the trailing seven days."""

    start: datetime
    end: datetime
    academic: int = 0
    mentoring: int = 0
    personal: int = 0
    effectiveness: int = 0
    highlights: list[HistoryItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.academic + self.mentoring + self.personal

    @property
    def window_label(self) -> str:
        return f"{self.start.strftime('%b %d')} - {self.end.strftime('%b %d')}"


def effectiveness_score(total: int) -> int:
    """
    Bounded activity score.

    An empty week scores 0 instead of the formula's baseline of 50.
    """
    if total == 0:
        return 0
    return min(100, 50 + 5 * total)


def items_in_window(items: list[HistoryItem], now: datetime) -> list[HistoryItem]:
    """Items completed strictly after `now - 7 days`."""
    cutoff = now - WINDOW
    return [i for i in items if i.completed_at > cutoff]


def summarize_week(items: list[HistoryItem], now: datetime) -> WeeklySummary:
    """
    Aggregate the trailing week of history.

    Pure function - no I/O.
    """
    recent = items_in_window(items, now)
    counts = {c: 0 for c in HistoryCategory}
    for item in recent:
        counts[item.category] += 1

    # sorted() is stable with reverse=True, so equal timestamps keep input order
    newest_first = sorted(recent, key=lambda i: i.completed_at, reverse=True)
    total = sum(counts.values())

    return WeeklySummary(
        start=now - WINDOW,
        end=now,
        academic=counts[HistoryCategory.ACADEMIC],
        mentoring=counts[HistoryCategory.MENTORING],
        personal=counts[HistoryCategory.PERSONAL],
        effectiveness=effectiveness_score(total),
        highlights=newest_first[:HIGHLIGHT_LIMIT],
    )
