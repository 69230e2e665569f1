"""Data models for the run log."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from .tier import ModelTier


class LogSeverity(Enum):
    """Severity of a log entry."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """A single append-only log event."""

    message: str
    severity: LogSeverity = LogSeverity.INFO
    model: ModelTier | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        tag = f"[{self.model.label}] " if self.model else ""
        return f"{self.timestamp:%H:%M:%S} {tag}{self.message}"
