from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from .config import DEFAULT_CONFIG, TilingConfig
from .errors import IndexOutOfRange, OverlapError
from .geometry import (
    EDGE_LENGTH,
    circumradius,
    convex_polygons_overlap,
    points_close,
    vertices,
    vertices_at,
)
from .index import AdjacencyIndex
from .models import EdgeRef, Polygon

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class TilingGraph:
    """Append-only store of placed polygons and their shared edges.

    Polygons are nodes addressed by sequential integer ids.  Adjacency is
    a symmetric map between :class:`EdgeRef` values; it covers both edges
    matched by explicit attachment and edges that happen to coincide.
    """

    def __init__(self, config: Optional[TilingConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._polygons: List[Polygon] = []
        self._partners: Dict[EdgeRef, EdgeRef] = {}
        self.index = AdjacencyIndex(
            self.config.epsilon,
            edge_cell_size=self.config.edge_cell_size,
            polygon_cell_size=self.config.polygon_cell_size,
        )

    def __len__(self) -> int:
        return len(self._polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self._polygons)

    def __getitem__(self, polygon_id: int) -> Polygon:
        if not 0 <= polygon_id < len(self._polygons):
            raise IndexOutOfRange(polygon_id, len(self._polygons), "model shapes")
        return self._polygons[polygon_id]

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return tuple(self._polygons)

    def is_empty(self) -> bool:
        return not self._polygons

    # ── mutation ────────────────────────────────────────────────────

    def insert(
        self,
        sides: int,
        center: Point,
        orientation: float,
        fill: Any = None,
        stroke: Any = None,
    ) -> int:
        """Append a polygon and record every edge it shares.

        Raises :class:`OverlapError` if one of its edges coincides with
        more than one stored edge, with an edge that is already matched,
        or if its interior overlaps a nearby polygon.
        """
        eps = self.config.epsilon
        polygon_id = len(self._polygons)
        pts = vertices_at(sides, center, orientation)

        matched: List[Tuple[EdgeRef, EdgeRef]] = []
        for i in range(sides):
            hits = self.index.find_coincident_edge(pts[i], pts[(i + 1) % sides])
            if len(hits) > 1:
                raise OverlapError(
                    f"edge {i} of the new {sides}-gon coincides with {len(hits)} edges: {hits}"
                )
            if not hits:
                continue
            other = hits[0]
            if other in self._partners:
                raise OverlapError(
                    f"edge {i} of the new {sides}-gon lands on {other}, "
                    f"already shared with {self._partners[other]}"
                )
            matched.append((EdgeRef(polygon_id, i), other))

        for other_id in self.index.nearby_polygons(center, circumradius(sides)):
            if convex_polygons_overlap(pts, vertices(self._polygons[other_id]), eps):
                raise OverlapError(
                    f"new {sides}-gon at ({center[0]:.6f}, {center[1]:.6f}) "
                    f"overlaps polygon {other_id}"
                )

        polygon = Polygon(polygon_id, sides, center, orientation, fill, stroke)
        self._polygons.append(polygon)
        self.index.register(polygon)
        for mine, other in matched:
            self._partners[mine] = other
            self._partners[other] = mine

        logger.debug(
            "inserted polygon %d (%d sides) at (%.6f, %.6f) sharing %d edge(s)",
            polygon_id, sides, center[0], center[1], len(matched),
        )
        return polygon_id

    @contextmanager
    def transaction(self) -> Iterator["TilingGraph"]:
        """Undo every insertion made inside the block if it raises."""
        mark = len(self._polygons)
        try:
            yield self
        except Exception:
            if len(self._polygons) > mark:
                logger.debug("rolling back %d polygon(s)", len(self._polygons) - mark)
            self._truncate(mark)
            raise

    def _truncate(self, count: int) -> None:
        while len(self._polygons) > count:
            polygon = self._polygons.pop()
            self.index.unregister(polygon)
            for i in range(polygon.sides):
                other = self._partners.pop(EdgeRef(polygon.id, i), None)
                if other is not None:
                    self._partners.pop(other, None)

    # ── queries ─────────────────────────────────────────────────────

    def edge_partner(self, ref: EdgeRef) -> Optional[EdgeRef]:
        """Return the edge matched with *ref*, or ``None`` on the boundary."""
        return self._partners.get(ref)

    def boundary_edges(self) -> List[EdgeRef]:
        """Return every unmatched edge, in id then edge-index order."""
        return [
            EdgeRef(p.id, i)
            for p in self._polygons
            for i in range(p.sides)
            if EdgeRef(p.id, i) not in self._partners
        ]

    def neighbors(self, polygon_id: int) -> List[int]:
        polygon = self[polygon_id]
        found = set()
        for i in range(polygon.sides):
            other = self._partners.get(EdgeRef(polygon_id, i))
            if other is not None:
                found.add(other.polygon_id)
        return sorted(found)

    def face_adjacency(self) -> Dict[int, List[int]]:
        """Return polygon adjacency map based purely on shared edges."""
        return {p.id: self.neighbors(p.id) for p in self._polygons}

    def dual_edges(self) -> Set[Tuple[int, int]]:
        """One ``(a, b)`` pair with ``a < b`` per pair of edge-sharing polygons."""
        return {
            (ref.polygon_id, other.polygon_id)
            for ref, other in self._partners.items()
            if ref.polygon_id < other.polygon_id
        }

    def adjacency_pairs(self) -> List[Tuple[EdgeRef, EdgeRef]]:
        """Each matched edge pair once, lower polygon id first."""
        return sorted(
            (ref, other) for ref, other in self._partners.items() if ref.polygon_id < other.polygon_id
        )

    def validate(self) -> List[str]:
        """Return invariant violations; an empty list means consistent."""
        errors: List[str] = []
        eps = self.config.epsilon

        for expected, polygon in enumerate(self._polygons):
            if polygon.id != expected:
                errors.append(f"Polygon at position {expected} has id {polygon.id}")

        for ref, other in self._partners.items():
            if ref.polygon_id == other.polygon_id:
                errors.append(f"Edge {ref} is matched to its own polygon")
                continue
            if self._partners.get(other) != ref:
                errors.append(f"Edge {ref} -> {other} is not symmetric")
            a0, a1 = self.index.edge_endpoints(ref)
            b0, b1 = self.index.edge_endpoints(other)
            if not (points_close(a0, b1, eps) and points_close(a1, b0, eps)):
                errors.append(f"Edges {ref} and {other} do not coincide with reversed winding")
            len_a = math.hypot(a1[0] - a0[0], a1[1] - a0[1])
            len_b = math.hypot(b1[0] - b0[0], b1[1] - b0[1])
            if abs(len_a - len_b) > eps or abs(len_a - EDGE_LENGTH) > eps:
                errors.append(f"Edges {ref} and {other} have lengths {len_a:.9f} and {len_b:.9f}")

        return errors
