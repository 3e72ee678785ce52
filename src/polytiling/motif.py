"""Motif replication — fill the canvas by translating a finished pattern.

The seed polygons passed to ``repeat`` are translated copies of earlier
polygons (typically of polygon 0).  Each seed therefore names a lattice
vector of the tiling: ``seed.center - anchor.center`` where *anchor* is
the earliest congruent, identically oriented polygon.  The whole current
pattern is then copied along those vectors, and their inverses, until no
copy reaches the canvas any more.

Usage
-----
::

    translations = derive_translations(graph, range(13, 19))
    with graph.transaction():
        replicate(graph, translations, canvas=(-4.0, -4.0, 4.0, 4.0))
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

from .errors import DegenerateMotifError, TilingError
from .geometry import (
    bounding_box,
    boxes_intersect,
    circumradius,
    orientations_equivalent,
    points_close,
    vertices_at,
)
from .graph import TilingGraph
from .index import SpatialHash
from .models import EdgeRef, Polygon

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Box = Tuple[float, float, float, float]


class _Placement(NamedTuple):
    sides: int
    center: Point
    orientation: float
    fill: Any
    stroke: Any


# ═══════════════════════════════════════════════════════════════════
# Translation inference
# ═══════════════════════════════════════════════════════════════════

def derive_translations(graph: TilingGraph, seed_ids: Sequence[int]) -> List[Point]:
    """Return the translation vectors (and inverses) implied by *seed_ids*.

    Raises :class:`DegenerateMotifError` if the seed range is empty, if
    none of the seeds has an unmatched edge to grow from, or if no seed is
    a translated copy of another polygon.
    """
    eps = graph.config.epsilon
    if len(seed_ids) == 0:
        raise DegenerateMotifError("seed range is empty")

    seeds = [graph[i] for i in seed_ids]
    has_boundary = any(
        graph.edge_partner(EdgeRef(seed.id, i)) is None
        for seed in seeds
        for i in range(seed.sides)
    )
    if not has_boundary:
        raise DegenerateMotifError("seed polygons have no unmatched edges to chain from")

    seed_set = set(seed_ids)
    translations: List[Point] = []
    for seed in seeds:
        anchor = _anchor_for(graph, seed, seed_set, eps)
        if anchor is None:
            logger.debug("seed %d has no congruent anchor", seed.id)
            continue
        dx = seed.center[0] - anchor.center[0]
        dy = seed.center[1] - anchor.center[1]
        for vector in ((dx, dy), (-dx, -dy)):
            if not any(points_close(vector, known, eps) for known in translations):
                translations.append(vector)

    if not translations:
        raise DegenerateMotifError(
            f"no seed in {_describe(seed_ids)} is a translated copy of another polygon"
        )

    logger.debug("derived %d translation(s): %s", len(translations), translations)
    return translations


def _anchor_for(graph: TilingGraph, seed: Polygon, seed_set: set, eps: float) -> Optional[Polygon]:
    """Earliest polygon that *seed* is a pure translation of.

    Polygons outside the seed range are preferred, in id order.
    """
    best: Optional[Polygon] = None
    for polygon in graph:
        if polygon.id == seed.id or polygon.sides != seed.sides:
            continue
        if points_close(polygon.center, seed.center, eps):
            continue
        if not orientations_equivalent(polygon.orientation, seed.orientation, seed.sides, eps):
            continue
        if polygon.id not in seed_set:
            return polygon
        if best is None:
            best = polygon
    return best


# ═══════════════════════════════════════════════════════════════════
# Frontier expansion
# ═══════════════════════════════════════════════════════════════════

def replicate(
    graph: TilingGraph,
    translations: Sequence[Point],
    canvas: Box,
    max_insertions: Optional[int] = None,
) -> List[int]:
    """Copy every current polygon along *translations* until the canvas is full.

    A copy is inserted only if its bounding box touches or intersects
    *canvas*.  Copies that miss the canvas but lie within a band around
    it are still expanded, so that a copy reachable only through an
    off-canvas step is not lost.  Returns the ids of the inserted polygons.

    The caller owns atomicity; wrap the call in ``graph.transaction()``.
    """
    eps = graph.config.epsilon
    base = [_Placement(p.sides, p.center, p.orientation, p.fill, p.stroke) for p in graph]
    if not base or not translations:
        return []

    region = _traversal_region(base, translations, canvas)
    seen: SpatialHash[_Placement] = SpatialHash(graph.config.polygon_cell_size)
    for placement in base:
        seen.insert(placement.center, placement)

    inserted: List[int] = []
    frontier = base
    iteration = 0
    while frontier:
        iteration += 1
        next_frontier: List[_Placement] = []
        for placement in frontier:
            for tx, ty in translations:
                center = (placement.center[0] + tx, placement.center[1] + ty)
                if not _contains(region, center):
                    continue
                candidate = placement._replace(center=center)
                if _already_seen(seen, candidate, eps):
                    continue
                seen.insert(center, candidate)
                next_frontier.append(candidate)

                pts = vertices_at(candidate.sides, center, candidate.orientation)
                if not boxes_intersect(bounding_box(pts), canvas, -eps):
                    continue
                if graph.index.find_coincident_polygon(center, candidate.orientation, candidate.sides) is not None:
                    continue
                inserted.append(
                    graph.insert(
                        candidate.sides,
                        center,
                        candidate.orientation,
                        candidate.fill,
                        candidate.stroke,
                    )
                )
                if max_insertions is not None and len(inserted) > max_insertions:
                    raise TilingError(f"repeat exceeded max_insertions={max_insertions}")
        logger.debug(
            "repeat iteration %d: %d walked, %d inserted so far",
            iteration, len(next_frontier), len(inserted),
        )
        frontier = next_frontier

    logger.info(
        "repeat inserted %d polygon(s) in %d iteration(s) using %d translation(s)",
        len(inserted), iteration, len(translations),
    )
    return inserted


def _traversal_region(base: Sequence[_Placement], translations: Sequence[Point], canvas: Box) -> Box:
    reach = max(math.hypot(tx, ty) for tx, ty in translations)
    radius = max(circumradius(p.sides) for p in base)
    band = 2.0 * reach + 2.0 * radius
    xs = [p.center[0] for p in base] + [canvas[0], canvas[2]]
    ys = [p.center[1] for p in base] + [canvas[1], canvas[3]]
    return (min(xs) - band, min(ys) - band, max(xs) + band, max(ys) + band)


def _contains(box: Box, point: Point) -> bool:
    return box[0] <= point[0] <= box[2] and box[1] <= point[1] <= box[3]


def _already_seen(seen: SpatialHash[_Placement], candidate: _Placement, eps: float) -> bool:
    for anchor, other in seen.query(candidate.center, eps):
        if (
            other.sides == candidate.sides
            and points_close(anchor, candidate.center, eps)
            and orientations_equivalent(other.orientation, candidate.orientation, candidate.sides, eps)
        ):
            return True
    return False


def _describe(ids: Sequence[int]) -> str:
    if isinstance(ids, range):
        return f"{ids.start}..{ids.stop}"
    return str(list(ids))
