"""JSON file state storage adapter."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    File-based key/value storage.

    Implements StateStore protocol. All keys live in one JSON document that is
    rewritten in full on every put.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self.path}: expected an object")
            return {}
        return data

    def get(self, key: str) -> str | None:
        """Read the blob stored under key. Returns None if absent."""
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def put(self, key: str, blob: str) -> None:
        """Store blob under key, overwriting anything there."""
        data = self._read_all()
        data[key] = blob
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
