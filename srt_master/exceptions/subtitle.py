"""Subtitle file and item collection exceptions."""

from .base import SrtMasterException


class SubtitleParseError(SrtMasterException):
    """Raised when a subtitle file cannot be read or parsed."""

    pass


class DuplicateItemError(SrtMasterException):
    """Raised when a subtitle collection contains the same id twice."""

    pass


class InvalidTransitionError(SrtMasterException):
    """Raised when an item status change is not allowed."""

    pass
