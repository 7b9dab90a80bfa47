"""Exception types raised by the memory game engine."""

from __future__ import annotations

__all__ = ["ConfigurationError"]


class ConfigurationError(ValueError):
    """Raised when a grid, group or symbol pool cannot produce a valid deck."""
