"""Validation-related exceptions."""

from .base import SrtMasterException


class ValidationError(SrtMasterException):
    """Raised when validation fails."""

    pass


class ConfigurationError(ValidationError):
    """Raised when run parameters are out of range or inconsistent."""

    pass


class SetupError(SrtMasterException):
    """Raised when setup checks fail (missing API key, etc)."""

    pass
