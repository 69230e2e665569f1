"""Configuration classes for SRT Master."""

import os
from dataclasses import dataclass, replace

from srt_master.exceptions import ConfigurationError

MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 50

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class TranslatorConfig:
    """Immutable configuration for a translation run.

    A pipeline run reads one snapshot of this configuration from start to
    finish. Changing settings means building a new instance (see
    ``with_allocation`` or ``dataclasses.replace``).
    """

    # Model tier split (percentages, complementary)
    flash_allocation: int = 70
    pro_allocation: int = 30

    # Language & context settings
    source_lang: str = "Auto Detect"
    target_lang: str = "Vietnamese"
    genre: str = "Modern/Life"
    custom_prompt: str = ""

    # Batch settings
    batch_size: int = 10  # Subtitle lines per request
    inter_batch_delay: float = 1.0  # Seconds to wait between batches

    # Remote model settings
    fast_model: str = "gemini-2.5-flash"
    quality_model: str = "gemini-3-pro-preview"
    api_key: str | None = None
    api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 120.0
    context_temperature: float = 0.2
    translate_temperature: float = 0.4

    # Apply every context suggestion as soon as it arrives
    auto_apply_suggestions: bool = False

    def __post_init__(self):
        """Strip surrounding whitespace from free-text settings."""
        for name in ("source_lang", "target_lang", "genre"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, value.strip())

    def with_allocation(self, pro_allocation: int) -> "TranslatorConfig":
        """Return a copy with the quality-tier share set and the fast share derived.

        Args:
            pro_allocation: Percentage of batches routed to the quality tier

        Returns:
            New configuration with complementary allocations
        """
        return replace(
            self,
            pro_allocation=pro_allocation,
            flash_allocation=100 - pro_allocation,
        )

    def resolve_api_key(self) -> str | None:
        """Get the API key from config, falling back to the environment."""
        if self.api_key:
            return self.api_key
        for var in API_KEY_ENV_VARS:
            value = os.getenv(var)
            if value:
                return value
        return None

    def validation_errors(self) -> list[str]:
        """Collect human-readable problems with this configuration.

        Returns:
            List of error messages (empty if the configuration is usable)
        """
        errors = []

        for name in ("flash_allocation", "pro_allocation"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                errors.append(f"{name} must be between 0 and 100 (got {value})")
        if self.flash_allocation + self.pro_allocation != 100:
            errors.append(
                "flash_allocation and pro_allocation must sum to 100 "
                f"(got {self.flash_allocation} + {self.pro_allocation})"
            )

        if not MIN_BATCH_SIZE <= self.batch_size <= MAX_BATCH_SIZE:
            errors.append(
                f"batch_size must be between {MIN_BATCH_SIZE} and {MAX_BATCH_SIZE} "
                f"(got {self.batch_size})"
            )

        if not self.target_lang:
            errors.append("target_lang must not be empty")
        if not self.fast_model or not self.quality_model:
            errors.append("both fast_model and quality_model must be set")
        if self.inter_batch_delay < 0:
            errors.append(f"inter_batch_delay must not be negative (got {self.inter_batch_delay})")
        if self.request_timeout <= 0:
            errors.append(f"request_timeout must be positive (got {self.request_timeout})")

        return errors

    def validate(self) -> None:
        """Check the configuration before a run starts.

        Raises:
            ConfigurationError: If any setting is out of range
        """
        errors = self.validation_errors()
        if errors:
            raise ConfigurationError("; ".join(errors))
