"""Structured-input capture: a small wizard that emits typed payloads."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum, auto

from .tasks import PersonalCategory, Priority

logger = logging.getLogger(__name__)


class CaptureState(IntEnum):
    """States of the capture wizard."""

    IDLE = auto()
    SELECTING_TYPE = auto()
    FORM_TASK = auto()
    FORM_MEETING = auto()
    FORM_QUESTION = auto()
    FORM_MENTORING = auto()


class RecordKind(Enum):
    TASK = "TASK"
    MEETING = "MEETING"
    QUESTION = "QUESTION"
    MENTORING_ENTRY = "MENTORING_ENTRY"


class MentoringSubtype(Enum):
    TOPIC = "TOPIC"
    DATE = "DATE"
    WORKSHOP = "WORKSHOP"


FORM_FOR_KIND = {
    RecordKind.TASK: CaptureState.FORM_TASK,
    RecordKind.MEETING: CaptureState.FORM_MEETING,
    RecordKind.QUESTION: CaptureState.FORM_QUESTION,
    RecordKind.MENTORING_ENTRY: CaptureState.FORM_MENTORING,
}

FORM_STATES = frozenset(FORM_FOR_KIND.values())


@dataclass(frozen=True)
class TaskPayload:
    title: str
    subject: str | None = None
    priority: Priority = Priority.MEDIUM
    date: str = ""
    category: PersonalCategory | None = None


@dataclass(frozen=True)
class MeetingPayload:
    title: str
    date: str
    time: str


@dataclass(frozen=True)
class MentoringPayload:
    subtype: MentoringSubtype
    title: str
    date: str
    time: str
    students: str | None = None


@dataclass(frozen=True)
class QuestionPayload:
    question: str


InputPayload = TaskPayload | MeetingPayload | MentoringPayload | QuestionPayload


@dataclass
class CaptureFields:
    """Values typed into the current form."""

    description: str = ""
    subject: str = ""
    priority: Priority = Priority.MEDIUM
    date: str = ""
    time: str = ""
    mentoring_subtype: MentoringSubtype = MentoringSubtype.TOPIC
    category: PersonalCategory | None = None
    students: str = ""


def _filled(*values: str) -> bool:
    return all(v and v.strip() for v in values)


@dataclass
class CaptureFlow:
    """
    The capture wizard.

    IDLE -> SELECTING_TYPE -> one FORM_* state -> IDLE on submit or cancel.
    Going back from a form keeps what was typed; returning to IDLE clears it.
    Requests that do not apply to the current state are ignored.
    """

    state: CaptureState = CaptureState.IDLE
    fields: CaptureFields = field(default_factory=CaptureFields)

    def open(self) -> CaptureState:
        if self.state is CaptureState.IDLE:
            self.state = CaptureState.SELECTING_TYPE
        else:
            self._ignore("open")
        return self.state

    def choose(self, kind: RecordKind) -> CaptureState:
        if self.state is CaptureState.SELECTING_TYPE:
            self.state = FORM_FOR_KIND[kind]
        else:
            self._ignore(f"choose {kind.value}")
        return self.state

    def back(self) -> CaptureState:
        if self.state in FORM_STATES:
            self.state = CaptureState.SELECTING_TYPE
        else:
            self._ignore("back")
        return self.state

    def cancel(self) -> CaptureState:
        self._reset()
        return self.state

    def can_submit(self) -> bool:
        """Whether the mandatory fields of the current form are filled."""
        f = self.fields
        match self.state:
            case CaptureState.FORM_TASK | CaptureState.FORM_QUESTION:
                return _filled(f.description)
            case CaptureState.FORM_MEETING | CaptureState.FORM_MENTORING:
                return _filled(f.description, f.date, f.time)
            case _:
                return False

    def submit(self, busy: bool = False, now: datetime | None = None) -> InputPayload | None:
        """
        Emit the payload for the current form and reset to IDLE.

        Returns None, leaving everything as it was, while another request is
        pending or when a mandatory field is empty.
        """
        if busy:
            logger.debug("Submission rejected: a request is still pending")
            return None
        if not self.can_submit():
            return None

        payload = self._build(now or datetime.now())
        self._reset()
        return payload

    def _build(self, now: datetime) -> InputPayload:
        f = self.fields
        title = f.description.strip()
        match self.state:
            case CaptureState.FORM_TASK:
                return TaskPayload(
                    title=title,
                    subject=f.subject.strip() or None,
                    priority=f.priority,
                    date=f.date.strip() or now.isoformat(),
                    category=f.category,
                )
            case CaptureState.FORM_MEETING:
                return MeetingPayload(title=title, date=f.date.strip(), time=f.time.strip())
            case CaptureState.FORM_MENTORING:
                return MentoringPayload(
                    subtype=f.mentoring_subtype,
                    title=title,
                    date=f.date.strip(),
                    time=f.time.strip(),
                    students=f.students.strip() or None,
                )
            case _:
                return QuestionPayload(question=title)

    def _reset(self) -> None:
        self.state = CaptureState.IDLE
        self.fields = CaptureFields()

    def _ignore(self, action: str) -> None:
        logger.debug(f"Ignoring '{action}' in state {self.state.name}")
