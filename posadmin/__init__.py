"""Role-gated point-of-sale administration service."""

__version__ = "1.0.0"
