"""Key/value state storage interface."""

from typing import Protocol


class StateStore(Protocol):
    """Opaque key/value blob store. Every write replaces the whole value."""

    def get(self, key: str) -> str | None:
        """Read the blob stored under key. Returns None if absent."""
        ...

    def put(self, key: str, blob: str) -> None:
        """Store blob under key, overwriting anything there."""
        ...
