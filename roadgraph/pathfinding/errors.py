"""Exceptions raised by the road graph."""


class RoadGraphError(Exception):
    """Base exception for road graph failures."""


class InvalidArgumentError(RoadGraphError, ValueError):
    """Raised when a graph mutation is given missing, unknown or negative values."""


class CorruptedStateError(RoadGraphError, RuntimeError):
    """Raised when a search's parent mapping cannot lead back to the start."""
