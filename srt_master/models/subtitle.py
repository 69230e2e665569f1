"""Data models for subtitle items and their processing status."""

from dataclasses import dataclass
from enum import Enum

from .tier import ModelTier


class ItemStatus(Enum):
    """Processing status of a subtitle item."""

    PENDING = "pending"
    CHECKING_CONTEXT = "checking_context"
    TRANSLATING = "translating"
    DONE = "done"
    ERROR = "error"

    def can_transition_to(self, target: "ItemStatus") -> bool:
        """Check if moving from this status to ``target`` is allowed.

        Staying in the same status is always allowed (field updates
        without a status change).
        """
        return target == self or target in _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        """Check if the item has finished the current run."""
        return self in (ItemStatus.DONE, ItemStatus.ERROR)


# DONE and ERROR only go back to PENDING through an explicit new run.
_TRANSITIONS: dict[ItemStatus, frozenset[ItemStatus]] = {
    ItemStatus.PENDING: frozenset({ItemStatus.CHECKING_CONTEXT}),
    ItemStatus.CHECKING_CONTEXT: frozenset({ItemStatus.TRANSLATING}),
    ItemStatus.TRANSLATING: frozenset({ItemStatus.DONE, ItemStatus.ERROR}),
    ItemStatus.DONE: frozenset({ItemStatus.PENDING}),
    ItemStatus.ERROR: frozenset({ItemStatus.PENDING}),
}


@dataclass
class SubtitleItem:
    """A single subtitle cue moving through the translation pipeline."""

    id: int
    start_time: str  # "HH:MM:SS,mmm", never reparsed
    end_time: str
    original_text: str
    context_suggestion: str | None = None
    is_context_applied: bool = False
    translated_text: str | None = None
    model_used: ModelTier | None = None
    status: ItemStatus = ItemStatus.PENDING
    error_message: str | None = None

    @property
    def has_suggestion(self) -> bool:
        """Check if the context check proposed a rewrite for this item."""
        return bool(self.context_suggestion)

    @property
    def is_flagged(self) -> bool:
        """Check if the item carries a pending or applied context suggestion."""
        return self.has_suggestion or self.is_context_applied

    @property
    def source_text(self) -> str:
        """Text sent for translation.

        The applied context suggestion wins over the original text.
        """
        if self.is_context_applied and self.context_suggestion:
            return self.context_suggestion
        return self.original_text

    @property
    def output_text(self) -> str:
        """Text written to the output file."""
        return self.translated_text or self.original_text

    def __str__(self) -> str:
        return f"SubtitleItem({self.id}, {self.status.value}: {self.original_text[:30]!r})"
