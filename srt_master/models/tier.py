"""Model tier selector."""

from enum import Enum


class ModelTier(Enum):
    """Remote model quality/cost level.

    The tier is what the pipeline routes on; the concrete model identifier
    behind each tier lives in the configuration and is only read by the
    model client.
    """

    FAST = "fast"
    QUALITY = "quality"

    @property
    def label(self) -> str:
        """Short display label."""
        return self.value.capitalize()
