"""Remote model client exceptions."""

from .base import SrtMasterException


class ModelClientError(SrtMasterException):
    """Raised when a request to the text-generation service fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rate_limited(self) -> bool:
        """Check if the service rejected the request for quota reasons."""
        return self.status_code == 429


class ModelResponseError(ModelClientError):
    """Raised when the service answers with unusable structured output."""

    pass
