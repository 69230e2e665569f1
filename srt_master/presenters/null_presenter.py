"""Null presenter for testing (no output)."""

from srt_master.models import RunResult, StoreStats, ValidationResult


class NullPresenter:
    """Present output to nowhere (testing implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message (no-op)."""
        pass

    def show_success(self, message: str) -> None:
        """Display a success message (no-op)."""
        pass

    def show_warning(self, message: str) -> None:
        """Display a warning message (no-op)."""
        pass

    def show_error(self, message: str) -> None:
        """Display an error message (no-op)."""
        pass

    def show_validation_result(self, result: ValidationResult) -> None:
        """Display the result of setup validation (no-op)."""
        pass

    def show_run_result(self, result: RunResult, stats: StoreStats) -> None:
        """Display the result of a translation run (no-op)."""
        pass


class NullProgressCallback:
    """Null implementation of progress callback (testing)."""

    def on_start(self, total: int, description: str) -> None:
        """Called when a run starts (no-op)."""
        pass

    def on_progress(self, current: int, item_description: str) -> None:
        """Called after each batch (no-op)."""
        pass

    def on_complete(self) -> None:
        """Called when a run completes (no-op)."""
        pass

    def on_error(self, item_description: str, error_message: str) -> None:
        """Called when a batch fails for good (no-op)."""
        pass
