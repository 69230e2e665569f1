"""Service for validating setup before a run."""

from srt_master.config import TranslatorConfig
from srt_master.models import ValidationIssue, ValidationResult


class ValidationService:
    """Validate API access and run settings (stateless service)."""

    def __init__(self, config: TranslatorConfig):
        """Initialize the validation service.

        Args:
            config: Configuration to validate
        """
        self.config = config

    def validate_setup(self) -> ValidationResult:
        """Run all validation checks.

        Returns:
            ValidationResult with status of each check

        Note:
            This method never raises exceptions - all problems are captured
            in the ValidationResult.
        """
        issues = []

        api_key_ok = bool(self.config.resolve_api_key())
        if not api_key_ok:
            issues.append(
                ValidationIssue(
                    component="API key",
                    severity="ERROR",
                    message="No Gemini API key found. Set GEMINI_API_KEY or API_KEY.",
                )
            )

        config_errors = self.config.validation_errors()
        for message in config_errors:
            issues.append(
                ValidationIssue(component="Configuration", severity="ERROR", message=message)
            )

        if self.config.inter_batch_delay == 0:
            issues.append(
                ValidationIssue(
                    component="Configuration",
                    severity="WARNING",
                    message="inter_batch_delay is 0; large files may hit rate limits",
                )
            )

        return ValidationResult(
            api_key_ok=api_key_ok,
            config_ok=not config_errors,
            issues=issues,
        )
