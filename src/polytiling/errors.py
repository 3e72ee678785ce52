"""Exceptions raised by the tiling engine.

Every engine operation is all-or-nothing: when one of these is raised the
model is left exactly as it was before the call.
"""

from __future__ import annotations


class TilingError(Exception):
    """Base class for all tiling errors."""


class NotEmptyError(TilingError):
    """``add`` was called on a model that already holds a polygon."""

    def __init__(self, count: int) -> None:
        super().__init__(f"model already holds {count} polygon(s); use add_multi")
        self.count = count


class EmptyModelError(TilingError):
    """An operation needs at least one polygon but the model is empty."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires a non-empty model; call add first")
        self.operation = operation


class IndexOutOfRange(TilingError, IndexError):
    """A shape id or edge index does not exist."""

    def __init__(self, index: int, length: int, name: str) -> None:
        super().__init__(f"out of bounds index {index} exceeds length {length} in {name}")
        self.index = index
        self.length = length
        self.name = name


class OverlapError(TilingError):
    """A placement would break edge-to-edge tiling (double claim or overlap)."""


class DegenerateMotifError(TilingError):
    """``repeat`` cannot derive a translation from the seed polygons."""


class InvalidShapeError(TilingError, ValueError):
    """User-provided shape parameters were invalid."""


class InvalidColorError(TilingError, ValueError):
    """User-provided colour components were invalid."""
