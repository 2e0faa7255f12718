"""Key worker and personal officer allocation engine."""

__version__ = "0.1.0"
