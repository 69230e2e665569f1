"""Business logic services for SRT Master."""

from .export_service import ExportService
from .gemini_client import GeminiModelClient
from .log_sink import LogSink
from .routing_policy import RoutingPolicy
from .subtitle_parser import SubtitleParserService
from .validation_service import ValidationService

__all__ = [
    "SubtitleParserService",
    "ExportService",
    "GeminiModelClient",
    "RoutingPolicy",
    "LogSink",
    "ValidationService",
]
