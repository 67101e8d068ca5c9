"""Tests for the shared workflow layer."""

import json
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from studydesk.adapters.json_store import JsonFileStore
from studydesk.config import Config
from studydesk.core.capture import MeetingPayload, MentoringPayload, MentoringSubtype, QuestionPayload, TaskPayload
from studydesk.core.history import HistoryCategory
from studydesk.core.mentoring import MentoringTopic, TopicStatus
from studydesk.core.responses import Intent, ParsedInput, Suggestion, SuggestionCategory, TaskDraft
from studydesk.core.state import AppState
from studydesk.core.tasks import PersonalCategory, Priority, TaskKind
from studydesk.ports.llm_service import LLMError, MissingCredentials
from studydesk.workflows import (
    BUSY,
    FAILED_SUGGESTION,
    NO_KEY_SUGGESTION,
    QUESTION_FAILED,
    Dashboard,
    load_state,
    open_dashboard,
    parse_due,
)


NOW = datetime(2025, 1, 16, 10, 0)


class MemoryStore:
    """In-memory StateStore that counts writes."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})
        self.puts: list[str] = []

    def get(self, key):
        return self.data.get(key)

    def put(self, key, blob):
        self.data[key] = blob
        self.puts.append(key)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def llm():
    return MagicMock()


@pytest.fixture
def dashboard(store, llm):
    dash = Dashboard(store=store, llm=llm, config=Config())
    with patch.object(Dashboard, "now", return_value=NOW):
        yield dash


class TestPersistence:
    def test_empty_store(self, dashboard):
        assert dashboard.state.tasks == ()

    def test_task_change_rewrites_tasks_only(self, dashboard, store):
        dashboard.add_task("Lab report")
        assert store.puts == ["tasks"]
        saved = json.loads(store.data["tasks"])
        assert saved[0]["title"] == "Lab report"

    def test_toggle_rewrites_tasks_and_history(self, dashboard, store):
        task = dashboard.add_task("Lab report")
        store.puts.clear()
        dashboard.toggle(task.id)
        assert sorted(store.puts) == ["history", "tasks"]

    def test_reload_from_store(self, dashboard, store, llm):
        task = dashboard.add_task("Lab report", subject="Simulation")
        dashboard.add_topic("ANOVA")

        reloaded = Dashboard(store=store, llm=llm)
        assert reloaded.state.tasks == (task,)
        assert reloaded.state.topics[0].title == "ANOVA"

    def test_corrupt_blob_is_discarded(self):
        state = load_state(MemoryStore({"tasks": "not json", "topics": "[]"}))
        assert state.tasks == ()

    def test_json_file_roundtrip(self, tmp_path, llm):
        store = JsonFileStore(tmp_path / "state.json")
        with patch.object(Dashboard, "now", return_value=NOW):
            first = Dashboard(store=store, llm=llm)
            task = first.add_task("Essay")
        second = Dashboard(store=JsonFileStore(tmp_path / "state.json"), llm=llm)
        assert second.state.tasks == (task,)


class TestSubmit:
    def test_task_payload(self, dashboard):
        message = dashboard.submit(TaskPayload("Quiz prep", "Simulation", Priority.HIGH, "2025-01-20"))

        task = dashboard.state.tasks[0]
        assert message == "Task added."
        assert task.kind is TaskKind.ACADEMIC
        assert task.priority is Priority.HIGH
        assert task.due == datetime(2025, 1, 20)
        assert task.description == "Quiz prep"

    def test_task_without_subject_is_other(self, dashboard):
        dashboard.submit(TaskPayload("Buy notebook", date=NOW.isoformat()))
        task = dashboard.state.tasks[0]
        assert task.kind is TaskKind.OTHER
        assert task.due == NOW

    def test_personal_task_payload(self, dashboard):
        dashboard.submit(TaskPayload("Pay rent", category=PersonalCategory.FINANCE, date="2025-01-20"))
        task = dashboard.state.tasks[0]
        assert task.kind is TaskKind.PERSONAL
        assert task.category is PersonalCategory.FINANCE

    def test_subject_with_category_is_rejected(self, dashboard):
        message = dashboard.submit(TaskPayload("Quiz", "Simulation", category=PersonalCategory.HOME))
        assert message.startswith("Couldn't save that")
        assert dashboard.state.tasks == ()

    def test_meeting_payload(self, dashboard):
        message = dashboard.submit(MeetingPayload("Advisor", "2025-01-20", "15:30"))

        task = dashboard.state.tasks[0]
        assert message == "Meeting scheduled."
        assert task.title == "Meeting: Advisor (15:30)"
        assert task.kind is TaskKind.PERSONAL
        assert task.priority is Priority.HIGH
        assert task.due == datetime(2025, 1, 20, 15, 30)

    def test_mentoring_topic_payload(self, dashboard):
        dashboard.submit(MentoringPayload(MentoringSubtype.TOPIC, "Regression", "2025-01-23", "14:00", "Group 3"))
        topic = dashboard.state.topics[0]
        assert topic.title == "Regression"
        assert topic.status is TopicStatus.PREPARED
        assert topic.students == "Group 3"
        assert topic.notes == "Session 2025-01-23 14:00"
        assert dashboard.state.tasks == ()

    def test_mentoring_workshop_payload(self, dashboard):
        message = dashboard.submit(MentoringPayload(MentoringSubtype.WORKSHOP, "Midterm review", "2025-01-23", "14:00"))

        task = dashboard.state.tasks[0]
        assert message == "Workshop scheduled."
        assert task.title == "Workshop: Midterm review"
        assert task.kind is TaskKind.MENTORING
        assert task.due == datetime(2025, 1, 23, 14, 0)

    def test_bad_date_reports_message(self, dashboard):
        message = dashboard.submit(MeetingPayload("Advisor", "next week", "15:30"))
        assert message.startswith("Couldn't save that")
        assert dashboard.state.tasks == ()

    def test_busy_rejects(self, dashboard):
        dashboard.busy = True
        assert dashboard.submit(TaskPayload("Quiz")) == BUSY
        assert dashboard.state.tasks == ()


class TestAsk:
    def test_answer_message(self, dashboard, llm):
        llm.parse_input.return_value = ParsedInput(Intent.QUERY, "You have Simulation at 11:00.")

        message = dashboard.submit(QuestionPayload("What's tomorrow?"))

        llm.parse_input.assert_called_once_with("What's tomorrow?", NOW.date())
        assert message == "You have Simulation at 11:00."
        assert dashboard.busy is False

    def test_add_task_intent(self, dashboard, llm):
        draft = TaskDraft(title="Simulation project", priority=Priority.HIGH, subject="Simulation")
        llm.parse_input.return_value = ParsedInput(Intent.ADD_TASK, "Added it.", task=draft)

        dashboard.ask("I have to finish the simulation project for tomorrow")

        task = dashboard.state.tasks[0]
        assert task.title == "Simulation project"
        assert task.kind is TaskKind.ACADEMIC
        assert task.priority is Priority.HIGH
        assert task.due == NOW

    def test_add_mentoring_intent(self, dashboard, llm):
        llm.parse_input.return_value = ParsedInput(Intent.ADD_MENTORING, "Noted.", mentoring_topic="Chi-square")
        dashboard.ask("prepare chi-square for mentoring")
        assert dashboard.state.topics[0].title == "Chi-square"

    def test_failure_is_static_message(self, dashboard, llm):
        llm.parse_input.side_effect = LLMError("boom")
        assert dashboard.ask("hello") == QUESTION_FAILED
        assert dashboard.busy is False

    def test_missing_key(self, dashboard, llm):
        llm.parse_input.side_effect = MissingCredentials("no key")
        assert dashboard.ask("hello") == QUESTION_FAILED

    def test_busy_gate(self, dashboard, llm):
        dashboard.busy = True
        assert dashboard.ask("hello") == BUSY
        llm.parse_input.assert_not_called()


class TestSuggestion:
    def test_returns_model_suggestion(self, dashboard, llm):
        llm.suggest.return_value = Suggestion("Rest tonight.", SuggestionCategory.REST)
        assert dashboard.suggestion().category is SuggestionCategory.REST
        assert dashboard.busy is False

    def test_missing_key_fallback(self, dashboard, llm):
        llm.suggest.side_effect = MissingCredentials("no key")
        assert dashboard.suggestion() == NO_KEY_SUGGESTION

    def test_failure_fallback(self, dashboard, llm):
        llm.suggest.side_effect = LLMError("timeout")
        assert dashboard.suggestion() == FAILED_SUGGESTION
        assert dashboard.busy is False


class TestDerived:
    def test_toggle_feeds_week(self, dashboard):
        task = dashboard.add_task("Lab report", subject="Simulation")
        dashboard.toggle(task.id[:4])

        week = dashboard.week()
        assert week.academic == 1
        assert week.effectiveness == 55
        assert week.highlights[0].category is HistoryCategory.ACADEMIC

    def test_toggle_unknown(self, dashboard):
        assert dashboard.toggle("missing") is None

    def test_cycle_topic(self, dashboard):
        topic = dashboard.add_topic("ANOVA")
        assert dashboard.cycle_topic(topic.id).status is TopicStatus.IN_PROGRESS

    def test_cycle_topic_exact_id_wins(self, dashboard):
        dashboard.state = AppState(topics=(MentoringTopic("ab", "ANOVA"), MentoringTopic("ab34", "Regression")))
        assert dashboard.cycle_topic("ab").title == "ANOVA"
        assert dashboard.cycle_topic("a") is None

    def test_record_feeds_week(self, dashboard, store):
        store.puts.clear()
        item = dashboard.record("Statistics midterm", HistoryCategory.ACADEMIC, details="4.6")

        assert store.puts == ["history"]
        assert dashboard.state.history == (item,)
        assert item.completed_at == NOW
        assert dashboard.week().academic == 1

    def test_record_rejects_empty_title(self, dashboard):
        with pytest.raises(ValueError):
            dashboard.record("  ", HistoryCategory.PERSONAL)

    def test_dashboard_counts(self, dashboard):
        dashboard.add_task("A", priority=Priority.HIGH)
        dashboard.add_task("B", priority=Priority.LOW)
        data = dashboard.dashboard()
        assert data.pending == 2
        assert len(data.classes_today) == 3  # Thursday


def test_parse_due():
    assert parse_due("2025-01-20") == datetime(2025, 1, 20)
    assert parse_due("2025-01-20", "08:15") == datetime(2025, 1, 20, 8, 15)


def test_open_dashboard_uses_configured_state_file(tmp_path):
    config = Config(state_file=str(tmp_path / "s.json"), gemini_api_key="k")
    dash = open_dashboard(config)
    assert dash.store.path == tmp_path / "s.json"
    assert dash.llm.config is config
