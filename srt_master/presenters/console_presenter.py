"""Console presenter for CLI output."""

from srt_master.models import ModelTier, RunResult, StoreStats, ValidationResult


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_validation_result(self, result: ValidationResult) -> None:
        """Display the result of setup validation."""
        print("\nValidation Results:")
        print(f"  {'[OK]' if result.api_key_ok else '[FAIL]'} API key")
        print(f"  {'[OK]' if result.config_ok else '[FAIL]'} Configuration")

        if result.issues:
            print("\nIssues:")
            for issue in result.issues:
                print(f"  {issue}")

        if result.all_passed:
            print("\n[OK] All validations passed")
        else:
            print("\n[FAIL] Some validations failed")

    def show_run_result(self, result: RunResult, stats: StoreStats) -> None:
        """Display the result of a translation run."""
        print("\nTranslation Complete:" if not result.cancelled else "\nTranslation Cancelled:")
        print(f"  Batches processed: {result.batches_processed}/{result.total_batches}")
        print(f"  Lines translated: {stats.done}/{stats.total}")
        print(f"  Lines failed: {stats.failed}")
        print(f"  Fast tier lines: {stats.done_by_tier.get(ModelTier.FAST, 0)}")
        print(f"  Quality tier lines: {stats.done_by_tier.get(ModelTier.QUALITY, 0)}")
        if result.fallback_batches:
            print(f"  Batches recovered by fallback: {result.fallback_batches}")
        print(f"  Time elapsed: {result.elapsed_time:.1f}s")

        if result.errors:
            print("\nErrors:")
            for error in result.errors:
                print(f"  {error}")


class ConsoleProgressCallback:
    """Console implementation of progress callback."""

    def __init__(self):
        """Initialize the progress callback."""
        self.total = 0
        self.current = 0
        self.description = ""

    def on_start(self, total: int, description: str) -> None:
        """Called when a run starts."""
        self.total = total
        self.current = 0
        self.description = description
        print(f"\n{description}...")

    def on_progress(self, current: int, item_description: str) -> None:
        """Called after each batch."""
        self.current = current
        percent = (current / self.total) * 100 if self.total else 0.0
        print(f"  [{current}/{self.total}] {percent:5.1f}% {item_description}")

    def on_complete(self) -> None:
        """Called when a run completes."""
        print(f"  [OK] Complete: {self.current}/{self.total}")

    def on_error(self, item_description: str, error_message: str) -> None:
        """Called when a batch fails for good."""
        print(f"  [ERROR] {item_description}: {error_message}")
