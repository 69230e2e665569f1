"""Data models for run results and validation."""

from dataclasses import dataclass, field

from .tier import ModelTier


@dataclass
class RunResult:
    """Result of a translation pipeline run."""

    total_items: int
    total_batches: int
    batches_processed: int = 0
    items_processed: int = 0
    items_done: int = 0
    items_failed: int = 0
    fallback_batches: int = 0
    tier_usage: dict[ModelTier, int] = field(default_factory=dict)  # batches per tier
    errors: list[str] = field(default_factory=list)
    cancelled: bool = False
    elapsed_time: float = 0.0

    @property
    def progress(self) -> float:
        """Percentage of items whose batch has been processed."""
        if not self.total_items:
            return 0.0
        return self.items_processed / self.total_items * 100

    @property
    def success(self) -> bool:
        """Check if every item was translated."""
        return not self.cancelled and self.items_failed == 0 and not self.errors

    def __str__(self) -> str:
        return (
            f"RunResult(items={self.total_items}, done={self.items_done}, "
            f"failed={self.items_failed}, batches={self.batches_processed}/"
            f"{self.total_batches}, time={self.elapsed_time:.1f}s)"
        )


@dataclass
class ValidationIssue:
    """A single validation issue."""

    component: str  # Component that failed (e.g., "API key", "Configuration")
    severity: str  # "ERROR" or "WARNING"
    message: str

    def __str__(self) -> str:
        return f"[{self.severity}] {self.component}: {self.message}"


@dataclass
class ValidationResult:
    """Result of setup validation."""

    api_key_ok: bool
    config_ok: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        """Check if all validation checks passed."""
        return self.api_key_ok and self.config_ok

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "ERROR" for issue in self.issues)

    def get_errors(self) -> list[ValidationIssue]:
        """Get all error-level issues."""
        return [issue for issue in self.issues if issue.severity == "ERROR"]

    def __str__(self) -> str:
        status = "PASSED" if self.all_passed else "FAILED"
        return f"ValidationResult({status}, errors={len(self.get_errors())})"
