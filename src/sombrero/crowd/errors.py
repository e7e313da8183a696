"""Error types raised by the crowd post-processing core.

Every error carries the name of the offending field (or quantity) so a
caller can report which part of a record or configuration was rejected.
"""
from typing import Optional


class SombreroError(Exception):
    """Base class for all errors raised by ``sombrero.crowd``."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidInput(SombreroError, ValueError):
    """A series or query argument is not real-valued, finite, or well formed."""


class ShapeMismatch(SombreroError, ValueError):
    """A series disagrees with the store's agent count or step count."""


class DataUnavailable(SombreroError, ValueError):
    """A query needs a series that was not supplied at construction."""


class DegenerateDirection(SombreroError, ValueError):
    """A direction interpolated to the zero vector and cannot be normalized."""


class ConfigurationError(SombreroError, KeyError):
    """A gradient was requested for an unknown or unconfigured quantity."""

    def __str__(self):
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ''
