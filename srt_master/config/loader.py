"""JSON configuration file loading."""

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from .config import TranslatorConfig
from .defaults import create_default_config

logger = logging.getLogger(__name__)


def load_config_file(path: Path, **overrides) -> TranslatorConfig:
    """Load configuration from a JSON file.

    Unknown keys are ignored. Keyword overrides (typically from the command
    line) take precedence over values found in the file.

    Args:
        path: Path to a JSON object with TranslatorConfig field names
        **overrides: Values that replace file settings

    Returns:
        Loaded configuration, or defaults plus overrides if the file is
        missing or invalid

    Note:
        An unreadable file falls back to the default configuration and
        logs a warning instead of raising.
    """
    if not path.exists():
        logger.warning(f"Config file not found, using defaults: {path}")
        return create_default_config(**overrides)

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")

        settings = _known_fields(data)
        if "pro_allocation" in overrides or "flash_allocation" in overrides:
            # An allocation override replaces the whole split from the file
            settings.pop("pro_allocation", None)
            settings.pop("flash_allocation", None)
        settings.update(overrides)
        return create_default_config(**settings)

    except (json.JSONDecodeError, TypeError, ValueError) as e:
        logger.warning(f"Invalid config file, using defaults: {e}")
        return create_default_config(**overrides)


def _known_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Keep only keys that are TranslatorConfig fields."""
    names = {f.name for f in fields(TranslatorConfig)}
    unknown = sorted(set(data) - names)
    if unknown:
        logger.debug(f"Ignoring unknown config keys: {', '.join(unknown)}")
    return {key: value for key, value in data.items() if key in names}
