"""Append-only run log."""

import logging
import threading
from collections.abc import Callable

from srt_master.interfaces import PresenterProtocol
from srt_master.models import LogEntry, LogSeverity, ModelTier

logger = logging.getLogger(__name__)

LogListener = Callable[[LogEntry], None]

_LOGGING_LEVELS = {
    LogSeverity.INFO: logging.INFO,
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.WARNING: logging.WARNING,
    LogSeverity.ERROR: logging.ERROR,
}


class LogSink:
    """Collect run events in append order.

    Entries are never changed or removed. Each new entry is also passed to
    the presenter (if any), to subscribed listeners, and to the standard
    logger.
    """

    def __init__(self, presenter: PresenterProtocol | None = None):
        """Initialize the log sink.

        Args:
            presenter: Optional presenter that displays each entry
        """
        self.presenter = presenter
        self._entries: list[LogEntry] = []
        self._listeners: list[LogListener] = []
        self._lock = threading.Lock()

    def add_log(
        self,
        message: str,
        severity: LogSeverity = LogSeverity.INFO,
        tier: ModelTier | None = None,
    ) -> LogEntry:
        """Append a log entry.

        Args:
            message: Event text
            severity: Event severity
            tier: Model tier the event relates to, if any

        Returns:
            The appended entry
        """
        entry = LogEntry(message=message, severity=severity, model=tier)
        with self._lock:
            self._entries.append(entry)
            listeners = list(self._listeners)

        logger.log(_LOGGING_LEVELS[severity], str(entry))
        self._present(entry)
        for listener in listeners:
            listener(entry)
        return entry

    def subscribe(self, listener: LogListener) -> None:
        """Register a callback for every future entry."""
        with self._lock:
            self._listeners.append(listener)

    @property
    def entries(self) -> list[LogEntry]:
        """Get a copy of all entries in append order."""
        with self._lock:
            return list(self._entries)

    def filter(self, severity: LogSeverity) -> list[LogEntry]:
        """Get entries of one severity."""
        return [entry for entry in self.entries if entry.severity == severity]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _present(self, entry: LogEntry) -> None:
        if self.presenter is None:
            return
        message = f"[{entry.model.label}] {entry.message}" if entry.model else entry.message
        if entry.severity == LogSeverity.SUCCESS:
            self.presenter.show_success(message)
        elif entry.severity == LogSeverity.WARNING:
            self.presenter.show_warning(message)
        elif entry.severity == LogSeverity.ERROR:
            self.presenter.show_error(message)
        else:
            self.presenter.show_info(message)
