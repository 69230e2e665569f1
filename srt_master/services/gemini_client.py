"""Gemini REST API model client."""

import json
import logging
from collections.abc import Sequence
from typing import Any

import requests

from srt_master.config import TranslatorConfig
from srt_master.exceptions import ModelClientError, ModelResponseError, SetupError
from srt_master.models import ContextSuggestion, ModelTier, SubtitleItem, Translation

from .prompts import (
    CONTEXT_RESPONSE_SCHEMA,
    CONTEXT_SYSTEM_INSTRUCTION,
    TRANSLATION_RESPONSE_SCHEMA,
    build_context_prompt,
    build_translation_prompt,
    build_translation_system_instruction,
)

logger = logging.getLogger(__name__)


class GeminiModelClient:
    """Model client backed by the Gemini ``generateContent`` endpoint.

    Implements ModelClient protocol. Requests ask for JSON output with a
    response schema; replies are validated entry by entry and malformed
    entries are dropped.
    """

    def __init__(self, config: TranslatorConfig, session: requests.Session | None = None):
        """Initialize the client.

        Args:
            config: Configuration holding model ids, endpoint and API key
            session: Optional HTTP session (connection reuse)
        """
        self.config = config
        self._http = session or requests

    def model_for(self, tier: ModelTier) -> str:
        """Get the model identifier behind a tier."""
        if tier == ModelTier.QUALITY:
            return self.config.quality_model
        return self.config.fast_model

    def check_context(
        self, items: Sequence[SubtitleItem], config: TranslatorConfig
    ) -> list[ContextSuggestion]:
        """Ask the quality model which lines are ambiguous.

        Raises:
            ModelClientError: If the request fails
            ModelResponseError: If the reply is not a JSON array
        """
        if not items:
            return []

        entries = self._generate(
            model=self.config.quality_model,
            prompt=build_context_prompt(items, config),
            system_instruction=CONTEXT_SYSTEM_INSTRUCTION,
            schema=CONTEXT_RESPONSE_SCHEMA,
            temperature=config.context_temperature,
        )
        return [
            ContextSuggestion(id=item_id, suggestion=text)
            for item_id, text in _valid_entries(entries, "suggestion")
        ]

    def translate(
        self, items: Sequence[SubtitleItem], config: TranslatorConfig, tier: ModelTier
    ) -> list[Translation]:
        """Translate a batch with the model behind ``tier``.

        Raises:
            ModelClientError: If the request fails
            ModelResponseError: If the reply is not a JSON array
        """
        if not items:
            return []

        entries = self._generate(
            model=self.model_for(tier),
            prompt=build_translation_prompt(items),
            system_instruction=build_translation_system_instruction(config),
            schema=TRANSLATION_RESPONSE_SCHEMA,
            temperature=config.translate_temperature,
        )
        return [
            Translation(id=item_id, translated_text=text)
            for item_id, text in _valid_entries(entries, "translatedText")
        ]

    def _generate(
        self,
        model: str,
        prompt: str,
        system_instruction: str,
        schema: dict[str, Any],
        temperature: float,
    ) -> list[Any]:
        """Call generateContent and decode the JSON array reply."""
        api_key = self.config.resolve_api_key()
        if not api_key:
            raise SetupError("Gemini API key is missing. Set GEMINI_API_KEY or API_KEY.")

        url = f"{self.config.api_base_url.rstrip('/')}/models/{model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
                "temperature": temperature,
            },
        }

        try:
            response = self._http.post(
                url,
                json=body,
                headers={"x-goog-api-key": api_key},
                timeout=self.config.request_timeout,
            )
        except requests.exceptions.Timeout as e:
            raise ModelClientError(f"Request to {model} timed out") from e
        except requests.RequestException as e:
            raise ModelClientError(f"Request to {model} failed: {e}") from e

        if response.status_code == 429:
            raise ModelClientError(f"Rate limit reached for {model}", status_code=429)
        if response.status_code != 200:
            raise ModelClientError(
                f"{model} returned HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ModelResponseError(f"{model} returned a non-JSON body") from e

        text = _response_text(data)
        if not text.strip():
            return []

        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            raise ModelResponseError(f"{model} returned invalid JSON: {e}") from e

        if not isinstance(entries, list):
            raise ModelResponseError(f"{model} returned {type(entries).__name__}, expected a list")
        return entries


def _response_text(data: Any) -> str:
    """Join the text parts of the first candidate."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        reason = data.get("promptFeedback", {}).get("blockReason") if isinstance(data, dict) else None
        if reason:
            raise ModelResponseError(f"Request blocked: {reason}") from e
        raise ModelResponseError("Response has no candidate content") from e

    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def _valid_entries(entries: list[Any], text_key: str) -> list[tuple[int, str]]:
    """Extract (id, text) pairs, dropping entries that do not fit the schema."""
    valid = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        text = entry.get(text_key)
        if not isinstance(text, str) or not text.strip():
            continue
        try:
            item_id = int(entry.get("id"))
        except (TypeError, ValueError):
            logger.debug(f"Dropping response entry without a usable id: {entry!r}")
            continue
        valid.append((item_id, text))
    return valid


def _error_message(response: requests.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text[:200]
