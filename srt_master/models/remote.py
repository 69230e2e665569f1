"""Data models for model client responses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContextSuggestion:
    """A clarified rewrite proposed for an ambiguous subtitle line."""

    id: int
    suggestion: str


@dataclass(frozen=True)
class Translation:
    """Translated text for a single subtitle line."""

    id: int
    translated_text: str
