"""Tolerance-aware spatial lookup for edges and polygons.

Floating-point coordinates of the same vertex, reached through different
chains of attachments, differ in their last bits.  Rather than hashing
rounded coordinates directly (two nearly equal values can round to
different keys), items are bucketed in a coarse integer grid and every
query scans the cells covering ``point ± radius``.  Candidates are then
verified with the exact tolerance.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from .geometry import orientations_equivalent, points_close, vertices
from .models import EdgeRef

if TYPE_CHECKING:
    from .models import Polygon

Point = Tuple[float, float]
Cell = Tuple[int, int]
T = TypeVar("T", bound=Hashable)


class SpatialHash(Generic[T]):
    """Bucket grid mapping integer cells to the items whose anchor falls in them."""

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0.0:
            raise ValueError("cell_size must be > 0")
        self.cell_size = cell_size
        self._cells: Dict[Cell, List[Tuple[Point, T]]] = defaultdict(list)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def cell_of(self, point: Point) -> Cell:
        return (math.floor(point[0] / self.cell_size), math.floor(point[1] / self.cell_size))

    def insert(self, point: Point, item: T) -> None:
        self._cells[self.cell_of(point)].append((point, item))
        self._count += 1

    def remove(self, point: Point, item: T) -> None:
        cell = self.cell_of(point)
        bucket = self._cells.get(cell, [])
        for i, (_, existing) in enumerate(bucket):
            if existing == item:
                del bucket[i]
                self._count -= 1
                if not bucket:
                    del self._cells[cell]
                return
        raise KeyError(f"{item!r} not stored at {point!r}")

    def query(self, point: Point, radius: float) -> Iterator[Tuple[Point, T]]:
        """Yield ``(anchor, item)`` pairs from every cell touching the query box.

        The box is a superset of the disc of *radius*; callers filter.
        """
        x0, y0 = self.cell_of((point[0] - radius, point[1] - radius))
        x1, y1 = self.cell_of((point[0] + radius, point[1] + radius))
        for cx in range(x0, x1 + 1):
            for cy in range(y0, y1 + 1):
                bucket = self._cells.get((cx, cy))
                if bucket:
                    yield from bucket


class AdjacencyIndex:
    """Edge and polygon lookups used by the graph during insertion."""

    def __init__(self, eps: float, edge_cell_size: float = 0.5, polygon_cell_size: float = 1.0) -> None:
        self.eps = eps
        self._edges: SpatialHash[EdgeRef] = SpatialHash(edge_cell_size)
        self._polygons: SpatialHash[int] = SpatialHash(polygon_cell_size)
        self._endpoints: Dict[EdgeRef, Tuple[Point, Point]] = {}
        self._shapes: Dict[int, Tuple[int, float]] = {}
        self._max_circumradius = 0.0

    # ── registration ────────────────────────────────────────────────

    def register(self, polygon: "Polygon") -> None:
        pts = vertices(polygon)
        n = polygon.sides
        for i in range(n):
            p0, p1 = pts[i], pts[(i + 1) % n]
            ref = EdgeRef(polygon.id, i)
            self._endpoints[ref] = (p0, p1)
            self._edges.insert(_midpoint(p0, p1), ref)
        self._polygons.insert(polygon.center, polygon.id)
        self._shapes[polygon.id] = (polygon.sides, polygon.orientation)
        self._max_circumradius = max(self._max_circumradius, polygon.circumradius)

    def unregister(self, polygon: "Polygon") -> None:
        for i in range(polygon.sides):
            ref = EdgeRef(polygon.id, i)
            p0, p1 = self._endpoints.pop(ref)
            self._edges.remove(_midpoint(p0, p1), ref)
        self._polygons.remove(polygon.center, polygon.id)
        del self._shapes[polygon.id]

    # ── queries ─────────────────────────────────────────────────────

    def find_coincident_edge(self, p0: Point, p1: Point) -> List[EdgeRef]:
        """Return every stored edge whose endpoints match ``{p0, p1}``.

        Matching is order-independent because an adjacent edge has the
        opposite winding.  More than one match means the plane is already
        double-covered at that edge.  An empty list means no stored edge
        matches.
        """
        matches: List[EdgeRef] = []
        for _, ref in self._edges.query(_midpoint(p0, p1), self.eps):
            q0, q1 = self._endpoints[ref]
            if (points_close(p0, q1, self.eps) and points_close(p1, q0, self.eps)) or (
                points_close(p0, q0, self.eps) and points_close(p1, q1, self.eps)
            ):
                matches.append(ref)
        return sorted(matches)

    def find_coincident_polygon(self, center: Point, orientation: float, sides: int) -> Optional[int]:
        """Return the id of an identical placed polygon, if any."""
        for anchor, polygon_id in self._polygons.query(center, self.eps):
            if not points_close(anchor, center, self.eps):
                continue
            other_sides, other_orientation = self._shapes[polygon_id]
            if other_sides == sides and orientations_equivalent(orientation, other_orientation, sides, self.eps):
                return polygon_id
        return None

    def nearby_polygons(self, center: Point, radius: float) -> List[int]:
        """Ids of polygons that could overlap a polygon of circumradius *radius*."""
        reach = radius + self._max_circumradius
        found = [
            polygon_id
            for anchor, polygon_id in self._polygons.query(center, reach)
            if math.hypot(anchor[0] - center[0], anchor[1] - center[1]) < reach
        ]
        return sorted(found)

    def edge_endpoints(self, ref: EdgeRef) -> Tuple[Point, Point]:
        return self._endpoints[ref]


def _midpoint(p0: Point, p1: Point) -> Point:
    return ((p0[0] + p1[0]) / 2.0, (p0[1] + p1[1]) / 2.0)
