"""Data models for SRT Master."""

from .log import LogEntry, LogSeverity
from .processing import RunResult, ValidationIssue, ValidationResult
from .remote import ContextSuggestion, Translation
from .subtitle import ItemStatus, SubtitleItem
from .subtitle_store import StoreStats, SubtitleStore
from .tier import ModelTier

__all__ = [
    "SubtitleItem",
    "ItemStatus",
    "ModelTier",
    "SubtitleStore",
    "StoreStats",
    "ContextSuggestion",
    "Translation",
    "LogEntry",
    "LogSeverity",
    "RunResult",
    "ValidationResult",
    "ValidationIssue",
]
