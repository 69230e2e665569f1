"""Progress callback protocol for progress reporting."""

from typing import Protocol


class ProgressCallback(Protocol):
    """Interface for progress reporting during a translation run.

    This protocol allows the pipeline to report progress without knowing
    how it will be displayed (CLI output, GUI progress bar, etc).
    """

    def on_start(self, total: int, description: str) -> None:
        """Called when a run starts.

        Args:
            total: Total number of subtitle items to process
            description: Description of the operation
        """
        ...

    def on_progress(self, current: int, item_description: str) -> None:
        """Called after each batch.

        Args:
            current: Number of items processed so far
            item_description: Description of the batch just processed
        """
        ...

    def on_complete(self) -> None:
        """Called when a run completes."""
        ...

    def on_error(self, item_description: str, error_message: str) -> None:
        """Called when a batch fails for good.

        Args:
            item_description: Description of the failed batch
            error_message: Error message
        """
        ...
