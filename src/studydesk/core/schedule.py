"""Pure class schedule logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


@dataclass(frozen=True)
class ClassSession:
    """A recurring weekly class session."""

    id: str
    subject: str
    day_of_week: int  # 0=Sunday .. 6=Saturday
    start_time: str  # "HH:MM", zero-padded 24h
    end_time: str
    room: str | None = None

    def format_time(self) -> str:
        return f"{self.start_time}-{self.end_time}"


def day_index(d: date) -> int:
    """Day index with Sunday as 0, matching ClassSession.day_of_week."""
    return d.isoweekday() % 7


def tomorrow_index(today: int) -> int:
    """Index of the day after `today`, wrapping Saturday to Sunday."""
    return (today + 1) % 7


def day_name(day: int) -> str:
    _check_day(day)
    return DAY_NAMES[day]


def sessions_for_day(schedule: list[ClassSession], day: int) -> list[ClassSession]:
    """
    Sessions held on `day`, earliest first.

    Pure function - no I/O. Start times are fixed-width "HH:MM" strings, so
    string order is chronological order. An empty result is a free day.
    """
    _check_day(day)
    return sorted(
        (s for s in schedule if s.day_of_week == day),
        key=lambda s: s.start_time,
    )


def week_grid(schedule: list[ClassSession]) -> dict[int, list[ClassSession]]:
    """All seven days mapped to their sorted sessions."""
    return {day: sessions_for_day(schedule, day) for day in range(7)}


def format_session_line(session: ClassSession) -> str:
    """Format a single class session for display."""
    room = f" (room {session.room})" if session.room else ""
    return f"- {session.format_time()} {session.subject}{room}"


def _check_day(day: int) -> None:
    if not 0 <= day <= 6:
        raise ValueError(f"Day index must be between 0 (Sunday) and 6 (Saturday), got {day}")
