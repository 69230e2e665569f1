"""Prompt and response schema builders for the model client."""

import json
from collections.abc import Sequence
from textwrap import dedent

from srt_master.config import TranslatorConfig
from srt_master.models import SubtitleItem

CONTEXT_SYSTEM_INSTRUCTION = "You are a helpful AI editor detecting context errors."

CONTEXT_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "INTEGER"},
            "suggestion": {
                "type": "STRING",
                "description": "The corrected or context-clarified version of the source text.",
            },
        },
        "required": ["id", "suggestion"],
    },
}

TRANSLATION_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "INTEGER"},
            "translatedText": {"type": "STRING"},
        },
        "required": ["id", "translatedText"],
    },
}


def build_context_prompt(items: Sequence[SubtitleItem], config: TranslatorConfig) -> str:
    """Build the context-check prompt for a batch.

    The original text is always checked, even when a suggestion was
    applied earlier.
    """
    payload = json.dumps(
        [{"id": item.id, "text": item.original_text} for item in items],
        ensure_ascii=False,
    )
    return dedent(f"""
        You are a professional subtitle context editor specializing in the genre: {config.genre}.
        Analyze the following list of subtitle lines (ID and Text).

        Task:
        1. Identify words or phrases that are ambiguous, homonyms, or culturally inappropriate for the '{config.genre}' genre.
        2. Specifically look for mistranslations common in this genre (e.g., 'crane' as bird vs machine, 'cultivation' in farming vs spiritual).
        3. If a line is potentially ambiguous or wrong in context, provide a rewritten text that clarifies the meaning for the translator.
        4. ONLY return items that need correction. If a line is fine, do not include it in the output.

        Input Data:
    """).strip() + "\n" + payload


def build_translation_system_instruction(config: TranslatorConfig) -> str:
    """Build the translator system instruction from the run settings."""
    return dedent(f"""
        You are a professional subtitle translator.
        Source Language: {config.source_lang}
        Target Language: {config.target_lang}
        Genre: {config.genre}
        User Instructions: {config.custom_prompt}

        Rules:
        1. Maintain the tone and style of the specified Genre.
        2. Keep translations concise to fit subtitle limits.
        3. Respect the context of the lines provided.
        4. Output strictly valid JSON.
    """).strip()


def build_translation_prompt(items: Sequence[SubtitleItem]) -> str:
    """Build the translation request for a batch, using each item's source text."""
    payload = json.dumps(
        [{"id": item.id, "text": item.source_text} for item in items],
        ensure_ascii=False,
    )
    return f"Translate the following array of subtitles:\n{payload}"
