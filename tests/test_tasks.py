"""Tests for core task logic."""

from datetime import datetime

import pytest

from studydesk.core.mentoring import MentoringTopic
from studydesk.core.tasks import (
    PersonalCategory,
    Priority,
    Task,
    TaskKind,
    View,
    create_task,
    find_by_id,
    personal_by_category,
    pending_count,
    priority_counts,
    sort_by_priority,
    toggle_task,
    visible_tasks,
)


# Fixtures
@pytest.fixture
def now():
    return datetime(2025, 1, 16, 10, 0)


@pytest.fixture
def make_task(now):
    """Factory for creating tasks."""
    def _make(
        id: str,
        priority: Priority = Priority.MEDIUM,
        completed: bool = False,
        subject: str | None = None,
        kind: TaskKind = TaskKind.OTHER,
        category: PersonalCategory | None = None,
    ) -> Task:
        return Task(
            id=id,
            title=f"Task {id}",
            kind=kind,
            priority=priority,
            due=now,
            completed=completed,
            subject=subject,
            category=category,
        )
    return _make


@pytest.fixture
def sample_tasks(make_task):
    return [
        make_task("1", Priority.LOW, subject="Simulation"),
        make_task("2", Priority.HIGH, subject="Statistical Models"),
        make_task("3", Priority.MEDIUM, completed=True, subject="Simulation"),
        make_task("4", Priority.MEDIUM),
        make_task("5", Priority.HIGH, subject="Simulation"),
        make_task("6", Priority.LOW, completed=True),
    ]


class TestTask:
    def test_priority_rank(self):
        assert Priority.HIGH.rank == 3
        assert Priority.MEDIUM.rank == 2
        assert Priority.LOW.rank == 1

    def test_from_dict(self):
        task = Task.from_dict(
            {
                "id": "abc123",
                "title": "Lab report",
                "kind": "ACADEMIC",
                "priority": "HIGH",
                "due": "2025-01-20T08:00:00",
                "completed": True,
                "subject": "Simulation",
            }
        )

        assert task.id == "abc123"
        assert task.kind is TaskKind.ACADEMIC
        assert task.priority is Priority.HIGH
        assert task.due == datetime(2025, 1, 20, 8, 0)
        assert task.completed is True
        assert task.description is None

    def test_from_dict_defaults(self):
        task = Task.from_dict({"id": "x", "title": "Call home", "due": "2025-01-20"})

        assert task.kind is TaskKind.OTHER
        assert task.priority is Priority.MEDIUM
        assert task.completed is False
        assert task.due == datetime(2025, 1, 20)

    def test_to_dict_roundtrip(self, make_task):
        task = make_task("7", Priority.LOW, subject="Simulation", kind=TaskKind.ACADEMIC)
        assert Task.from_dict(task.to_dict()) == task

    def test_category_roundtrip(self, make_task):
        task = make_task("8", kind=TaskKind.PERSONAL, category=PersonalCategory.HEALTH)
        data = task.to_dict()
        assert data["category"] == "Health"
        assert Task.from_dict(data) == task

    def test_category_missing_from_old_data(self):
        task = Task.from_dict({"id": "x", "title": "Gym", "due": "2025-01-20"})
        assert task.category is None


class TestCreateTask:
    def test_defaults(self, now):
        task = create_task("Read chapter 3", set(), now=now)

        assert task.title == "Read chapter 3"
        assert task.priority is Priority.MEDIUM
        assert task.due == now
        assert task.completed is False
        assert task.kind is TaskKind.OTHER

    def test_subject_makes_task_academic(self, now):
        task = create_task("Quiz prep", set(), kind=TaskKind.PERSONAL, subject="Simulation", now=now)
        assert task.kind is TaskKind.ACADEMIC
        assert task.subject == "Simulation"

    def test_caller_kind_without_subject(self, now):
        task = create_task("Groceries", set(), kind=TaskKind.PERSONAL, now=now)
        assert task.kind is TaskKind.PERSONAL

    def test_category_makes_task_personal(self, now):
        task = create_task("Pay rent", set(), category=PersonalCategory.FINANCE, now=now)
        assert task.kind is TaskKind.PERSONAL
        assert task.category is PersonalCategory.FINANCE

    def test_subject_and_category_rejected(self, now):
        with pytest.raises(ValueError):
            create_task("Quiz", set(), subject="Simulation", category=PersonalCategory.HOME, now=now)

    def test_empty_title_rejected(self, now):
        with pytest.raises(ValueError):
            create_task("   ", set(), now=now)

    def test_id_not_reused(self, now, monkeypatch):
        tokens = iter(["aaaa0000", "aaaa0000", "bbbb1111"])
        monkeypatch.setattr("studydesk.core.tasks.secrets.token_hex", lambda n: next(tokens))

        task = create_task("Second", {"aaaa0000"}, now=now)
        assert task.id == "bbbb1111"


class TestVisibleTasks:
    def test_completed_never_shown(self, sample_tasks):
        for view in View:
            ids = [t.id for t in visible_tasks(sample_tasks, view)]
            assert "3" not in ids
            assert "6" not in ids

    def test_priority_view_sorts_by_rank(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.PRIORITY)
        ranks = [t.priority.rank for t in result]
        assert ranks == sorted(ranks, reverse=True)
        assert {t.id for t in result} == {"1", "2", "4", "5"}

    def test_priority_view_low_then_high(self, make_task):
        tasks = [make_task("low", Priority.LOW), make_task("high", Priority.HIGH)]
        result = visible_tasks(tasks, View.PRIORITY)
        assert [t.id for t in result] == ["high", "low"]

    def test_priority_ties_keep_input_order(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.PRIORITY)
        assert [t.id for t in result] == ["2", "5", "4", "1"]

    def test_priority_sub_filter(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.PRIORITY, "HIGH")
        assert [t.id for t in result] == ["2", "5"]

    def test_priority_view_ignores_non_priority_filter(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.PRIORITY, "Simulation")
        assert [t.id for t in result] == ["2", "5", "4", "1"]

    def test_subject_sub_filter_keeps_order(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.SUBJECT, "Simulation")
        assert [t.id for t in result] == ["1", "5"]

    def test_subject_match_is_case_sensitive(self, sample_tasks):
        assert visible_tasks(sample_tasks, View.SUBJECT, "simulation") == []

    def test_subject_view_without_filter(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.SUBJECT)
        assert [t.id for t in result] == ["1", "2", "4", "5"]

    def test_calendar_view_passes_pending_through(self, sample_tasks):
        result = visible_tasks(sample_tasks, View.CALENDAR, "HIGH")
        assert [t.id for t in result] == ["1", "2", "4", "5"]

    def test_empty_input(self):
        assert visible_tasks([], View.PRIORITY) == []


class TestCounts:
    def test_pending_count(self, sample_tasks):
        assert pending_count(sample_tasks) == 4

    def test_priority_counts(self, sample_tasks):
        counts = priority_counts(sample_tasks)
        assert counts == {Priority.HIGH: 2, Priority.MEDIUM: 1, Priority.LOW: 1}

    def test_priority_counts_empty(self):
        assert priority_counts([]) == {Priority.HIGH: 0, Priority.MEDIUM: 0, Priority.LOW: 0}


class TestToggle:
    def test_flips_only_target(self, sample_tasks):
        result = toggle_task(sample_tasks, "4")

        assert result[3].completed is True
        assert result[3].title == sample_tasks[3].title
        assert result[3].priority is sample_tasks[3].priority
        for before, after in zip(sample_tasks[:3] + sample_tasks[4:], result[:3] + result[4:]):
            assert before == after

    def test_toggle_back(self, sample_tasks):
        result = toggle_task(sample_tasks, "3")
        assert result[2].completed is False

    def test_unknown_id(self, sample_tasks):
        assert toggle_task(sample_tasks, "nope") == sample_tasks


class TestSortAndFind:
    def test_sort_by_priority(self, make_task):
        tasks = [make_task("a", Priority.LOW), make_task("b", Priority.MEDIUM), make_task("c", Priority.HIGH)]
        assert [t.id for t in sort_by_priority(tasks)] == ["c", "b", "a"]

    def test_find_by_prefix(self, make_task):
        tasks = [make_task("ab12"), make_task("cd34")]
        assert find_by_id(tasks, "ab").id == "ab12"

    def test_find_ambiguous_prefix(self, make_task):
        tasks = [make_task("ab12"), make_task("ab34")]
        assert find_by_id(tasks, "ab") is None

    def test_find_exact_wins(self, make_task):
        tasks = [make_task("ab"), make_task("ab34")]
        assert find_by_id(tasks, "ab").id == "ab"

    def test_find_by_id_works_on_any_item_with_id(self):
        topics = [MentoringTopic(id="ab", title="ANOVA"), MentoringTopic(id="ab34", title="Regression")]
        assert find_by_id(topics, "ab").title == "ANOVA"
        assert find_by_id(topics, "ab3").title == "Regression"
        assert find_by_id(topics, "zz") is None


class TestPersonalByCategory:
    def test_groups_in_category_order(self, make_task):
        tasks = [
            make_task("1", Priority.LOW, kind=TaskKind.PERSONAL, category=PersonalCategory.SHOPPING),
            make_task("2", Priority.LOW, kind=TaskKind.PERSONAL, category=PersonalCategory.HOME),
            make_task("3", Priority.HIGH, kind=TaskKind.PERSONAL, category=PersonalCategory.HOME),
        ]
        groups = personal_by_category(tasks)

        assert list(groups) == [PersonalCategory.HOME, PersonalCategory.SHOPPING]
        assert [t.id for t in groups[PersonalCategory.HOME]] == ["3", "2"]

    def test_skips_completed_and_uncategorized(self, make_task):
        tasks = [
            make_task("1", kind=TaskKind.PERSONAL, category=PersonalCategory.HEALTH, completed=True),
            make_task("2", kind=TaskKind.PERSONAL),
            make_task("3", subject="Simulation"),
        ]
        assert personal_by_category(tasks) == {}
