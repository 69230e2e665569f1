"""Batch partitioning."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def partition_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split items into contiguous batches of at most ``batch_size``.

    Every item lands in exactly one batch, in original order; only the
    last batch may be smaller.

    Args:
        items: Ordered items to split
        batch_size: Maximum number of items per batch

    Returns:
        List of batches

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1 (got {batch_size})")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
