"""Configuration management for SRT Master."""

from .config import TranslatorConfig
from .defaults import GENRES, LANGUAGES, create_default_config
from .loader import load_config_file

__all__ = [
    "TranslatorConfig",
    "create_default_config",
    "load_config_file",
    "GENRES",
    "LANGUAGES",
]
