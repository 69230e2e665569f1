"""Default configuration values for SRT Master."""

from .config import TranslatorConfig

GENRES = [
    "Xianxia/Cultivation",
    "Wuxia/Historical",
    "Modern/Life",
    "Sci-Fi/Tech",
    "Comedy/Teen",
    "Horror",
    "Documentary",
]

LANGUAGES = [
    "Auto Detect",
    "English",
    "Chinese",
    "Japanese",
    "Korean",
    "Vietnamese",
    "Spanish",
    "French",
    "German",
]


def create_default_config(**overrides) -> TranslatorConfig:
    """Create a default configuration with optional overrides.

    Args:
        **overrides: Keyword arguments to override default values

    Returns:
        TranslatorConfig with defaults and overrides applied

    Example:
        config = create_default_config(
            target_lang="Spanish",
            batch_size=20
        )
    """
    if "pro_allocation" in overrides:
        overrides.setdefault("flash_allocation", 100 - overrides["pro_allocation"])
    elif "flash_allocation" in overrides:
        overrides["pro_allocation"] = 100 - overrides["flash_allocation"]
    return TranslatorConfig(**overrides)
