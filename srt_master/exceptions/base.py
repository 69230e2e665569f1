"""Base exception classes for SRT Master."""


class SrtMasterException(Exception):
    """Base exception for all SRT Master errors.

    All custom exceptions in the srt_master package should inherit
    from this base class for consistent error handling.
    """

    pass
