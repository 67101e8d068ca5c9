"""Ports - interfaces/protocols for external dependencies."""

from .state_store import StateStore
from .llm_service import LLMError, LLMService, MissingCredentials

__all__ = [
    "StateStore",
    "LLMService",
    "LLMError",
    "MissingCredentials",
]
