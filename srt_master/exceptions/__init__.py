"""Custom exceptions for SRT Master."""

from .base import SrtMasterException
from .model import ModelClientError, ModelResponseError
from .subtitle import DuplicateItemError, InvalidTransitionError, SubtitleParseError
from .validation import ConfigurationError, SetupError, ValidationError

__all__ = [
    "SrtMasterException",
    "ValidationError",
    "ConfigurationError",
    "SetupError",
    "ModelClientError",
    "ModelResponseError",
    "SubtitleParseError",
    "DuplicateItemError",
    "InvalidTransitionError",
]
