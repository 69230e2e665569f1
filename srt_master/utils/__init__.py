"""Utility functions for SRT Master."""

from .batching import partition_batches
from .file_utils import ensure_directory, read_text_file

__all__ = ["partition_batches", "ensure_directory", "read_text_file"]
