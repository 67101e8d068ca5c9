"""Adapters - I/O implementations of ports."""

from .json_store import JsonFileStore
from .gemini import GeminiService

__all__ = [
    "JsonFileStore",
    "GeminiService",
]
