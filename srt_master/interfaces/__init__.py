"""Interface protocols for SRT Master."""

from .model_client import ModelClient
from .presenter import PresenterProtocol
from .progress import ProgressCallback

__all__ = ["ModelClient", "PresenterProtocol", "ProgressCallback"]
