"""Recipe import core: JSON-LD extraction, metric normalization and shopping-list merging."""

__version__ = "0.1.0"
