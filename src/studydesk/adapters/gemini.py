"""Gemini API adapter - HTTP client for parsing and suggestions."""

import json
import logging
from datetime import date

import requests

from studydesk.config import Config, load_config
from studydesk.core import prompts
from studydesk.core.reference import SUBJECTS, USER_PROFILE, WEEKLY_SCHEDULE
from studydesk.core.responses import ParsedInput, Suggestion
from studydesk.core.tasks import Task
from studydesk.ports.llm_service import LLMError, MissingCredentials

logger = logging.getLogger(__name__)


class GeminiService:
    """
    Gemini REST adapter.

    Implements LLMService protocol. Builds requests with a JSON response schema
    and decodes the first candidate. No fallback logic - failures raise LLMError.
    """

    def __init__(
        self,
        config: Config | None = None,
        subjects: list[str] | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or load_config()
        self.subjects = subjects or SUBJECTS
        self._session = session or requests.Session()

    @property
    def available(self) -> bool:
        return bool(self.config.gemini_api_key)

    def _endpoint(self) -> str:
        base = self.config.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.config.gemini_model}:generateContent"

    def _generate_json(self, prompt: str, schema: dict) -> dict:
        """Run one generateContent call and decode its JSON answer."""
        if not self.available:
            raise MissingCredentials("GEMINI_API_KEY is not configured")

        body = {
            "systemInstruction": {
                "parts": [{"text": prompts.system_instruction(USER_PROFILE, self.subjects)}]
            },
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }

        try:
            resp = self._session.post(
                self._endpoint(),
                headers={"x-goog-api-key": self.config.gemini_api_key},
                json=body,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise LLMError(f"Gemini request failed: {e}") from e

        if resp.status_code != 200:
            logger.error(f"Gemini returned {resp.status_code}: {resp.text}")
            raise LLMError(f"Gemini returned HTTP {resp.status_code}")

        try:
            text = resp.json()["candidates"][0]["content"]["parts"][0]["text"]
            data = json.loads(text)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Malformed Gemini response: {e}") from e

        if not isinstance(data, dict):
            raise LLMError("Malformed Gemini response: expected a JSON object")
        return data

    def parse_input(self, text: str, today: date) -> ParsedInput:
        """Turn free text into an intent, optional drafts and a reply message."""
        prompt = prompts.parse_prompt(text, today, self.subjects)
        data = self._generate_json(prompt, prompts.parse_schema(self.subjects))
        return ParsedInput.from_api(data, self.subjects)

    def suggest(self, tasks: list[Task], today: date) -> Suggestion:
        """Produce a short suggestion for the day from a task snapshot."""
        prompt = prompts.suggestion_prompt(tasks, WEEKLY_SCHEDULE, today, USER_PROFILE)
        data = self._generate_json(prompt, prompts.SUGGESTION_SCHEMA)
        return Suggestion.from_api(data)
