"""Route group exports."""

from . import health, stops

__all__ = ["health", "stops"]
