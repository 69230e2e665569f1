"""Protocol for remote text-generation model clients."""

from collections.abc import Sequence
from typing import Protocol

from srt_master.config import TranslatorConfig
from srt_master.models import ContextSuggestion, ModelTier, SubtitleItem, Translation


class ModelClient(Protocol):
    """Interface for the remote service that checks and translates subtitles.

    Both operations take a whole batch and answer for a subset of it. The
    response is authoritative only for the ids it contains; callers must
    handle ids that are missing. Any failure is reported by raising.
    """

    def check_context(
        self, items: Sequence[SubtitleItem], config: TranslatorConfig
    ) -> list[ContextSuggestion]:
        """Find lines that are ambiguous for the configured genre.

        Args:
            items: Batch of subtitle items
            config: Run configuration (genre, languages)

        Returns:
            Suggestions for flagged items only; an absent id means the
            line looked fine.
        """
        ...

    def translate(
        self, items: Sequence[SubtitleItem], config: TranslatorConfig, tier: ModelTier
    ) -> list[Translation]:
        """Translate a batch with the model behind ``tier``.

        Each item is sent as its ``source_text`` (the applied context
        suggestion if there is one, else the original text).

        Args:
            items: Batch of subtitle items
            config: Run configuration (languages, genre, custom prompt)
            tier: Model tier to use

        Returns:
            Translations keyed by item id
        """
        ...
