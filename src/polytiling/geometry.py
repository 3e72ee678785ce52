"""Geometry kernel: pure functions on regular polygons.

Conventions
-----------
- Every polygon in a model has edges of length :data:`EDGE_LENGTH`; the
  circumradius is derived from the side count alone.
- Vertices wind counter-clockwise, so the interior of edge ``P0 → P1``
  lies to its left and the outward normal points to its right.
- No comparison is exact.  Callers pass an absolute tolerance *eps*.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Sequence, Tuple

from .errors import IndexOutOfRange

if TYPE_CHECKING:
    from .models import Polygon

Point = Tuple[float, float]
Box = Tuple[float, float, float, float]

EDGE_LENGTH = 1.0
TAU = 2.0 * math.pi


# ═══════════════════════════════════════════════════════════════════
# Regular polygon measures
# ═══════════════════════════════════════════════════════════════════

def circumradius(sides: int, edge_length: float = EDGE_LENGTH) -> float:
    """Centre-to-vertex distance of a regular *sides*-gon."""
    return edge_length / (2.0 * math.sin(math.pi / sides))


def apothem(sides: int, edge_length: float = EDGE_LENGTH) -> float:
    """Centre-to-edge-midpoint distance of a regular *sides*-gon."""
    return edge_length / (2.0 * math.tan(math.pi / sides))


def interior_angle(sides: int) -> float:
    """Interior angle at each vertex, in radians."""
    return math.pi * (sides - 2) / sides


def polygon_area(sides: int, edge_length: float = EDGE_LENGTH) -> float:
    return sides * edge_length * edge_length / (4.0 * math.tan(math.pi / sides))


# ═══════════════════════════════════════════════════════════════════
# Vertices and edges
# ═══════════════════════════════════════════════════════════════════

def vertices_at(sides: int, center: Point, orientation: float, radius: float | None = None) -> List[Point]:
    """Vertices of a regular polygon that need not be placed in a model."""
    r = circumradius(sides) if radius is None else radius
    step = TAU / sides
    cx, cy = center
    return [
        (cx + r * math.cos(orientation + k * step), cy + r * math.sin(orientation + k * step))
        for k in range(sides)
    ]


def vertices(polygon: "Polygon") -> List[Point]:
    """Ordered vertices of *polygon*."""
    return vertices_at(polygon.sides, polygon.center, polygon.orientation)


def edge_endpoints(polygon: "Polygon", edge_index: int) -> Tuple[Point, Point]:
    """Return ``(P0, P1)``: vertex *edge_index* and the vertex after it."""
    if not 0 <= edge_index < polygon.sides:
        raise IndexOutOfRange(edge_index, polygon.sides, "shape edges")
    pts = vertices(polygon)
    return pts[edge_index], pts[(edge_index + 1) % polygon.sides]


def edge_midpoint(polygon: "Polygon", edge_index: int) -> Point:
    p0, p1 = edge_endpoints(polygon, edge_index)
    return ((p0[0] + p1[0]) / 2.0, (p0[1] + p1[1]) / 2.0)


def edge_normal(polygon: "Polygon", edge_index: int) -> Point:
    """Unit normal of an edge, pointing away from the polygon."""
    p0, p1 = edge_endpoints(polygon, edge_index)
    return _right_normal(p0, p1)


def attach_transform(polygon: "Polygon", edge_index: int, new_sides: int) -> Tuple[Point, float]:
    """Place a *new_sides*-gon against edge *edge_index* of *polygon*.

    Returns ``(center, orientation)`` of the new polygon.  Its centre lies
    on the perpendicular bisector of the shared edge, one apothem outside
    *polygon*.  Its edge 0 runs ``P1 → P0`` (the shared edge with reversed
    winding), so vertex 0 is ``P1``.
    """
    p0, p1 = edge_endpoints(polygon, edge_index)
    nx, ny = _right_normal(p0, p1)
    mx = (p0[0] + p1[0]) / 2.0
    my = (p0[1] + p1[1]) / 2.0
    d = apothem(new_sides)
    center = (mx + nx * d, my + ny * d)
    orientation = math.atan2(p1[1] - center[1], p1[0] - center[0])
    return center, orientation


def inset_vertices(polygon: "Polygon", margin: float) -> List[Point]:
    """Vertices of *polygon* with every edge moved inward by *margin*."""
    a = math.pi / polygon.sides
    radius = polygon.circumradius - margin / math.cos(a)
    return vertices_at(polygon.sides, polygon.center, polygon.orientation, radius)


def _right_normal(p0: Point, p1: Point) -> Point:
    dx = p1[0] - p0[0]
    dy = p1[1] - p0[1]
    length = math.hypot(dx, dy) or 1.0
    return (dy / length, -dx / length)


# ═══════════════════════════════════════════════════════════════════
# Tolerant comparisons
# ═══════════════════════════════════════════════════════════════════

def points_close(a: Point, b: Point, eps: float) -> bool:
    return abs(a[0] - b[0]) <= eps and abs(a[1] - b[1]) <= eps


def orientations_equivalent(a: float, b: float, sides: int, eps: float) -> bool:
    """True if orientations *a* and *b* give the same vertex set.

    Orientations are equivalent modulo ``2π / sides``.  The residue is
    measured as vertex displacement so *eps* stays in model units.
    """
    step = TAU / sides
    turns = (a - b) / step
    residue = abs(turns - round(turns)) * step
    return residue * circumradius(sides) <= eps


def bounding_box(points: Sequence[Point]) -> Box:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def boxes_intersect(a: Box, b: Box, eps: float = 0.0) -> bool:
    """True if boxes share more than a boundary strip of width *eps*."""
    return (
        min(a[2], b[2]) - max(a[0], b[0]) > eps
        and min(a[3], b[3]) - max(a[1], b[1]) > eps
    )


def convex_polygons_overlap(a: Sequence[Point], b: Sequence[Point], eps: float) -> bool:
    """Separating-axis test for two convex polygons.

    Polygons that only touch (a shared edge or vertex) do not overlap.
    """
    for pts in (a, b):
        n = len(pts)
        for i in range(n):
            ax, ay = _right_normal(pts[i], pts[(i + 1) % n])
            min_a, max_a = _project(a, ax, ay)
            min_b, max_b = _project(b, ax, ay)
            if min(max_a, max_b) - max(min_a, min_b) <= eps:
                return False
    return True


def point_in_convex_polygon(point: Point, pts: Sequence[Point], eps: float) -> bool:
    """True if *point* is inside or on the boundary of a CCW convex polygon."""
    px, py = point
    n = len(pts)
    for i in range(n):
        x0, y0 = pts[i]
        x1, y1 = pts[(i + 1) % n]
        cross = (x1 - x0) * (py - y0) - (y1 - y0) * (px - x0)
        if cross < -eps:
            return False
    return True


def _project(pts: Sequence[Point], ax: float, ay: float) -> Tuple[float, float]:
    values = [x * ax + y * ay for x, y in pts]
    return min(values), max(values)
