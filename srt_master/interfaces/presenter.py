"""Presenter protocol for output abstraction."""

from typing import Protocol

from srt_master.models import RunResult, StoreStats, ValidationResult


class PresenterProtocol(Protocol):
    """Interface for presenting output to user (CLI, GUI, etc).

    This protocol abstracts all output operations, allowing the same
    pipeline to work with different presentation layers.
    """

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        ...

    def show_success(self, message: str) -> None:
        """Display a success message."""
        ...

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        ...

    def show_error(self, message: str) -> None:
        """Display an error message."""
        ...

    def show_validation_result(self, result: ValidationResult) -> None:
        """Display the result of setup validation."""
        ...

    def show_run_result(self, result: RunResult, stats: StoreStats) -> None:
        """Display the result of a translation run.

        Args:
            result: Pipeline run summary
            stats: Final item statistics from the store
        """
        ...
