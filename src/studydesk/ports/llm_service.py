"""LLM service interface."""

from datetime import date
from typing import Protocol

from studydesk.core.responses import ParsedInput, Suggestion
from studydesk.core.tasks import Task


class LLMError(Exception):
    """Raised when the language model cannot produce a usable answer."""

    pass


class MissingCredentials(LLMError):
    """Raised when no API key is configured."""

    pass


class LLMService(Protocol):
    """Interface for the language-model collaborator."""

    def parse_input(self, text: str, today: date) -> ParsedInput:
        """Turn free text into an intent, optional drafts and a reply message."""
        ...

    def suggest(self, tasks: list[Task], today: date) -> Suggestion:
        """Produce a short suggestion for the day from a task snapshot."""
        ...
