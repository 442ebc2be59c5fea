"""Source package marker for the tolerance calculator service."""

__version__ = "1.0.0"
