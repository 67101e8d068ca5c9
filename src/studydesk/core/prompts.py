"""Prompt compilation for the language-model collaborator. Pure - no I/O."""

from datetime import date

from .reference import UserProfile
from .schedule import ClassSession, day_index, sessions_for_day
from .tasks import Priority, Task, TaskKind, filter_pending

INTENTS = ["ADD_TASK", "ADD_MENTORING", "QUERY", "CHAT"]
SUGGESTION_CATEGORIES = ["STUDY", "REST", "PRIORITY", "GENERAL"]


def system_instruction(profile: UserProfile, subjects: list[str]) -> str:
    return f"""You are the personal digital assistant of {profile.name}.
Age: {profile.age}.
University: {profile.university}.
Program: {profile.program}.
Additional role: {profile.role}.

Current subjects: {", ".join(subjects)}.

Your responsibilities:
1. Manage task lists, classes and meetings.
2. Keep the mentoring role in mind and suggest time for it.
3. Detect academic overload and suggest breaks.
4. Always answer in a clear, ordered and useful dashboard style.

IMPORTANT:
- If a task relates to a subject, link the subject correctly.
- If the user mentions mentoring or tutoring, classify it as MENTORING.
- Organize by priority."""


def parse_prompt(text: str, today: date, subjects: list[str]) -> str:
    return f"""Today is {today.strftime('%A')}, {today.isoformat()}.
User input: "{text}"

Decide whether this is a new task, a new mentoring topic, a schedule question or just chat.
If it is a task, infer the due date and priority from context ("for tomorrow" means HIGH priority).
If it mentions a subject ({", ".join(subjects)}), put it in the 'subject' field."""


def suggestion_prompt(
    tasks: list[Task],
    schedule: list[ClassSession],
    today: date,
    profile: UserProfile,
) -> str:
    pending = ", ".join(f"{t.title} ({t.priority.value})" for t in filter_pending(tasks))
    classes = ", ".join(c.subject for c in sessions_for_day(schedule, day_index(today)))
    return f"""Today is {today.strftime('%A')}.
User: {profile.name} ({profile.role}).
Classes today: {classes or 'None'}.
Pending tasks: {pending or 'None'}.

Write one strategic recommendation (two sentences at most).
- With many tasks, prioritize.
- On a light day, suggest getting ahead on mentoring work.
- On weekends, suggest rest or a light review."""


def parse_schema(subjects: list[str]) -> dict:
    """Response schema for free-text parsing."""
    return {
        "type": "OBJECT",
        "properties": {
            "intent": {"type": "STRING", "enum": INTENTS, "description": "The user's intention"},
            "taskDetails": {
                "type": "OBJECT",
                "nullable": True,
                "properties": {
                    "title": {"type": "STRING"},
                    "type": {"type": "STRING", "enum": [k.value for k in TaskKind]},
                    "priority": {"type": "STRING", "enum": [p.value for p in Priority]},
                    "dueDate": {"type": "STRING", "description": "ISO date YYYY-MM-DD"},
                    "description": {"type": "STRING"},
                    "subject": {
                        "type": "STRING",
                        "enum": [*subjects, "Other"],
                        "description": "The academic subject related to this task if applicable",
                    },
                },
            },
            "mentoringTopic": {
                "type": "STRING",
                "nullable": True,
                "description": "Title of a mentoring topic to prepare, if the user asked for one",
            },
            "responseMessage": {
                "type": "STRING",
                "description": "A friendly, efficient confirmation or answer for the user.",
            },
        },
        "required": ["intent", "responseMessage"],
    }


SUGGESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestionText": {"type": "STRING", "description": "Advice tailored to the user"},
        "category": {"type": "STRING", "enum": SUGGESTION_CATEGORIES},
    },
}
