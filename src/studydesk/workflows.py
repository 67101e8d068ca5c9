"""Shared workflow layer between the CLI and the functional core.

The Dashboard owns the application state, persists it after every change and
is the only place the language model is called from. Model failures never
escape: they become static messages here.
"""

import json
import logging
from datetime import datetime

from .adapters.gemini import GeminiService
from .adapters.json_store import JsonFileStore
from .config import Config, load_config
from .core.capture import InputPayload, MeetingPayload, MentoringPayload, MentoringSubtype, QuestionPayload, TaskPayload
from .core.dashboard import DashboardData, assemble_dashboard
from .core.history import HistoryCategory, HistoryItem, WeeklySummary, summarize_week
from .core.mentoring import MentoringTopic, create_topic
from .core.reference import WEEKLY_SCHEDULE
from .core.responses import Intent, Suggestion, SuggestionCategory
from .core.schedule import ClassSession
from .core.state import Action, AddTask, AddTopic, AppState, CycleTopic, RecordHistory, ToggleTask, reduce
from .core.tasks import PersonalCategory, Priority, Task, TaskKind, create_task, find_by_id, new_id
from .ports.llm_service import LLMError, LLMService, MissingCredentials
from .ports.state_store import StateStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
TOPICS_KEY = "topics"
HISTORY_KEY = "history"

NO_KEY_SUGGESTION = Suggestion("Set GEMINI_API_KEY to get smart suggestions.", SuggestionCategory.GENERAL)
FAILED_SUGGESTION = Suggestion("Couldn't generate a suggestion right now.", SuggestionCategory.GENERAL)
QUESTION_FAILED = "There was an error processing your request."
BUSY = "Still working on your previous request. Try again in a moment."


# ============== Persistence ==============


def _load_list(store: StateStore, key: str, from_dict) -> tuple:
    blob = store.get(key)
    if not blob:
        return ()
    try:
        return tuple(from_dict(item) for item in json.loads(blob))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Discarding unreadable '{key}' data: {e}")
        return ()


def load_state(store: StateStore) -> AppState:
    """Read every collection from the store."""
    return AppState(
        tasks=_load_list(store, TASKS_KEY, Task.from_dict),
        topics=_load_list(store, TOPICS_KEY, MentoringTopic.from_dict),
        history=_load_list(store, HISTORY_KEY, HistoryItem.from_dict),
    )


def save_state(store: StateStore, state: AppState, previous: AppState | None = None) -> None:
    """Rewrite each collection that changed since `previous` (all of them if None)."""
    for key, attr in ((TASKS_KEY, "tasks"), (TOPICS_KEY, "topics"), (HISTORY_KEY, "history")):
        items = getattr(state, attr)
        if previous is not None and getattr(previous, attr) == items:
            continue
        store.put(key, json.dumps([item.to_dict() for item in items]))


# ============== Date helpers ==============


def parse_due(date_str: str, time_str: str | None = None) -> datetime:
    """Parse a form date ("YYYY-MM-DD" or full ISO) with an optional "HH:MM"."""
    if time_str:
        return datetime.fromisoformat(f"{date_str}T{time_str}")
    return datetime.fromisoformat(date_str)


# ============== Dashboard ==============


class Dashboard:
    """
    Composition root for the assistant.

    Holds the single AppState, applies actions through the reducer, saves after
    each change and gates model calls with a busy flag.
    """

    def __init__(
        self,
        store: StateStore,
        llm: LLMService,
        config: Config | None = None,
        schedule: list[ClassSession] | None = None,
    ):
        self.store = store
        self.llm = llm
        self.config = config or Config()
        self.schedule = schedule if schedule is not None else WEEKLY_SCHEDULE
        self.state = load_state(store)
        self.busy = False

    def now(self) -> datetime:
        return self.config.now()

    def dispatch(self, action: Action) -> AppState:
        """Apply an action and persist whatever changed."""
        previous = self.state
        self.state = reduce(previous, action)
        if self.state is not previous:
            save_state(self.store, self.state, previous)
        return self.state

    # ---------- Tasks ----------

    def add_task(
        self,
        title: str,
        *,
        kind: TaskKind = TaskKind.OTHER,
        priority: Priority | None = None,
        due: datetime | None = None,
        subject: str | None = None,
        description: str | None = None,
        category: PersonalCategory | None = None,
    ) -> Task:
        task = create_task(
            title,
            self.state.ids(),
            kind=kind,
            priority=priority,
            due=due,
            subject=subject,
            description=description,
            category=category,
            now=self.now(),
        )
        self.dispatch(AddTask(task))
        logger.info(f"Added task {task.id}: {task.title}")
        return task

    def toggle(self, task_id: str) -> Task | None:
        """Toggle completion by id or unique id prefix; returns the updated task."""
        task = find_by_id(list(self.state.tasks), task_id)
        if task is None:
            return None
        self.dispatch(ToggleTask(task.id, self.now()))
        return find_by_id(list(self.state.tasks), task.id)

    # ---------- Mentoring ----------

    def add_topic(self, title: str, students: str | None = None, notes: str | None = None) -> MentoringTopic:
        topic = create_topic(title, self.state.ids(), students=students, notes=notes)
        self.dispatch(AddTopic(topic))
        return topic

    def cycle_topic(self, topic_id: str) -> MentoringTopic | None:
        """Advance a topic by id or unique id prefix; returns the updated topic."""
        topic = find_by_id(list(self.state.topics), topic_id)
        if topic is None:
            return None
        self.dispatch(CycleTopic(topic.id, self.now()))
        return find_by_id(list(self.state.topics), topic.id)

    # ---------- History ----------

    def record(self, title: str, category: HistoryCategory, details: str | None = None) -> HistoryItem:
        """Log an activity finished outside the task and topic lists."""
        title = title.strip()
        if not title:
            raise ValueError("Activity title must not be empty")
        item = HistoryItem(
            id=new_id(self.state.ids()),
            title=title,
            category=category,
            completed_at=self.now(),
            details=details,
        )
        self.dispatch(RecordHistory(item))
        return item

    # ---------- Structured input ----------

    def submit(self, payload: InputPayload) -> str:
        """Apply a captured payload and return the message to show."""
        if self.busy:
            return BUSY

        try:
            match payload:
                case TaskPayload():
                    message = self._submit_task(payload)
                case MeetingPayload():
                    message = self._submit_meeting(payload)
                case MentoringPayload():
                    message = self._submit_mentoring(payload)
                case QuestionPayload():
                    message = self.ask(payload.question)
                case _:
                    raise TypeError(f"Unknown payload: {payload!r}")
        except ValueError as e:
            logger.warning(f"Rejected payload {payload!r}: {e}")
            message = f"Couldn't save that: {e}"

        return message

    def _submit_task(self, payload: TaskPayload) -> str:
        self.add_task(
            payload.title,
            priority=payload.priority,
            due=parse_due(payload.date) if payload.date else None,
            subject=payload.subject,
            description=payload.title,
            category=payload.category,
        )
        return "Task added."

    def _submit_meeting(self, payload: MeetingPayload) -> str:
        self.add_task(
            f"Meeting: {payload.title} ({payload.time})",
            kind=TaskKind.PERSONAL,
            priority=Priority.HIGH,
            due=parse_due(payload.date, payload.time),
        )
        return "Meeting scheduled."

    def _submit_mentoring(self, payload: MentoringPayload) -> str:
        if payload.subtype is MentoringSubtype.TOPIC:
            self.add_topic(
                payload.title,
                students=payload.students,
                notes=f"Session {payload.date} {payload.time}",
            )
            return "Mentoring topic added."

        prefix = "Workshop" if payload.subtype is MentoringSubtype.WORKSHOP else "Mentoring session"
        self.add_task(
            f"{prefix}: {payload.title}",
            kind=TaskKind.MENTORING,
            due=parse_due(payload.date, payload.time),
        )
        return f"{prefix} scheduled."

    # ---------- Language model ----------

    def ask(self, question: str) -> str:
        """Send free text to the model and apply any draft it returns."""
        if self.busy:
            return BUSY

        self.busy = True
        try:
            parsed = self.llm.parse_input(question, self.now().date())
        except MissingCredentials as e:
            logger.warning(f"Question not sent: {e}")
            return QUESTION_FAILED
        except LLMError as e:
            logger.error(f"Question failed: {e}")
            return QUESTION_FAILED
        finally:
            self.busy = False

        if parsed.intent is Intent.ADD_TASK and parsed.task is not None:
            draft = parsed.task
            self.add_task(
                draft.title,
                kind=draft.kind,
                priority=draft.priority,
                due=draft.due,
                subject=draft.subject,
                description=draft.description,
            )
        elif parsed.intent is Intent.ADD_MENTORING and parsed.mentoring_topic:
            self.add_topic(parsed.mentoring_topic)

        return parsed.message or "Done."

    def suggestion(self) -> Suggestion:
        """Daily suggestion, or a static fallback when the model is unavailable."""
        if self.busy:
            return Suggestion(BUSY)

        self.busy = True
        try:
            return self.llm.suggest(list(self.state.tasks), self.now().date())
        except MissingCredentials:
            return NO_KEY_SUGGESTION
        except LLMError as e:
            logger.error(f"Suggestion failed: {e}")
            return FAILED_SUGGESTION
        finally:
            self.busy = False

    # ---------- Derived views ----------

    def dashboard(self) -> DashboardData:
        return assemble_dashboard(self.state, self.schedule, self.now())

    def week(self) -> WeeklySummary:
        return summarize_week(list(self.state.history), self.now())


def open_dashboard(config: Config | None = None) -> Dashboard:
    """Build a Dashboard wired to the configured store and Gemini."""
    config = config or load_config()
    return Dashboard(
        store=JsonFileStore(config.state_path),
        llm=GeminiService(config),
        config=config,
    )
