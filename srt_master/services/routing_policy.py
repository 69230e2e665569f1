"""Per-batch model tier routing."""

import logging
import random
from collections.abc import Iterable

from srt_master.models import ModelTier, SubtitleItem

logger = logging.getLogger(__name__)


class RoutingPolicy:
    """Choose one model tier for a whole batch.

    A batch containing any flagged item always goes to the quality tier.
    Otherwise a single uniform draw in [0, 100) is compared against the
    quality-tier allocation. Draws are independent per batch, so the
    observed split only approaches the configured one over many batches.
    """

    def __init__(self, pro_allocation: float, rng: random.Random | None = None):
        """Initialize the routing policy.

        Args:
            pro_allocation: Percentage (0-100) of unflagged batches for the
                quality tier
            rng: Random source; pass a seeded instance for repeatable routing
        """
        if not 0 <= pro_allocation <= 100:
            raise ValueError(f"pro_allocation must be between 0 and 100 (got {pro_allocation})")
        self.pro_allocation = pro_allocation
        self._rng = rng or random.Random()

    @staticmethod
    def is_flagged(items: Iterable[SubtitleItem]) -> bool:
        """Check if any item has a pending or applied context suggestion."""
        return any(item.is_flagged for item in items)

    def select_tier(self, flagged: bool) -> ModelTier:
        """Select the tier for a batch.

        Args:
            flagged: Whether the batch contains a flagged item

        Returns:
            Selected model tier
        """
        if flagged:
            return ModelTier.QUALITY

        roll = self._rng.random() * 100
        tier = ModelTier.QUALITY if roll < self.pro_allocation else ModelTier.FAST
        logger.debug(f"Routing roll {roll:.1f} vs {self.pro_allocation}: {tier.value}")
        return tier

    def select_for_batch(self, items: Iterable[SubtitleItem]) -> tuple[ModelTier, bool]:
        """Select the tier for a batch from its current items.

        Returns:
            Tuple of (tier, flagged)
        """
        flagged = self.is_flagged(items)
        return self.select_tier(flagged), flagged
