"""Configuration management for studydesk."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

STUDYDESK_HOME = Path(os.environ.get("STUDYDESK_HOME", Path.home() / "studydesk"))
CONFIG_FILE = STUDYDESK_HOME / "config" / "studydesk.conf"
DATA_DIR = STUDYDESK_HOME / "data"

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass
class Config:
    """studydesk configuration."""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = GEMINI_BASE_URL
    request_timeout: int = 30
    timezone: str = "America/Bogota"
    state_file: str = ""

    @property
    def state_path(self) -> Path:
        if self.state_file:
            return Path(self.state_file).expanduser()
        return DATA_DIR / "state.json"

    def now(self) -> datetime:
        """Current local time in the configured timezone, without tzinfo."""
        try:
            tz = ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using system local time")
            return datetime.now()
        return datetime.now(tz).replace(tzinfo=None)


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from studydesk.conf, then the environment."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "gemini_api_key":
                    config.gemini_api_key = value
                case "gemini_model":
                    config.gemini_model = value
                case "gemini_base_url":
                    config.gemini_base_url = value
                case "request_timeout":
                    try:
                        config.request_timeout = int(value)
                    except ValueError:
                        logger.warning(f"Invalid REQUEST_TIMEOUT {value!r}, keeping {config.request_timeout}")
                case "timezone":
                    config.timezone = value
                case "state_file":
                    config.state_file = value

    env_key = os.environ.get("GEMINI_API_KEY")
    if env_key:
        config.gemini_api_key = env_key

    return config
