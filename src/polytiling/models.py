from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, Tuple

from .errors import InvalidShapeError
from .geometry import EDGE_LENGTH, circumradius

Point = Tuple[float, float]


@dataclass(frozen=True)
class Shape:
    """Template for a regular polygon that has not been placed yet.

    *fill* and *stroke* are opaque to the engine; renderers decide what
    they mean (see :class:`polytiling.color.Color`).
    """

    sides: int
    fill: Any = None
    stroke: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.sides, bool) or not isinstance(self.sides, int):
            raise InvalidShapeError(f"sides must be an int, got {type(self.sides).__name__}")
        if self.sides < 3:
            raise InvalidShapeError(f"a polygon needs at least 3 sides, got {self.sides}")


@dataclass(frozen=True)
class Polygon:
    """A placed regular polygon.

    Vertices are derived, never stored: vertex *k* sits at
    ``center + circumradius * (cos(orientation + 2πk/sides), sin(...))``.
    """

    id: int
    sides: int
    center: Point
    orientation: float
    fill: Any = None
    stroke: Any = None

    @property
    def circumradius(self) -> float:
        return circumradius(self.sides, EDGE_LENGTH)


class EdgeRef(NamedTuple):
    """Edge *edge_index* of polygon *polygon_id* (vertex i to vertex i+1)."""

    polygon_id: int
    edge_index: int
