"""Dual tiling derived from a model.

The dual is computed without mutating the model and returned as an
:class:`Overlay` that a renderer can draw on its own or on top of the
tiling.

- **Sites** (overlay points) are the polygon centres.
- **Segments** join the centres of every pair of edge-sharing polygons;
  one per entry of :meth:`TilingGraph.dual_edges`.
- **Regions** are the dual faces: around each vertex that is completely
  surrounded (incident interior angles sum to 2π), the centres of the
  incident polygons in angular order.  Vertices on the tiling boundary
  have no dual face.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Tuple

from .geometry import interior_angle, points_close, vertices
from .index import SpatialHash

if TYPE_CHECKING:
    from .model import Model

Point = Tuple[float, float]

_ANGLE_TOLERANCE = 1e-6


# ═══════════════════════════════════════════════════════════════════
# Overlay data model
# ═══════════════════════════════════════════════════════════════════

@dataclass
class OverlayPoint:
    """A labelled point in model space."""
    id: str
    x: float
    y: float
    label: str = ""
    source_polygon_id: int = -1


@dataclass
class OverlaySegment:
    """A line segment between the centres of two adjacent polygons."""
    id: str
    start: Point
    end: Point
    source_polygon_ids: Tuple[int, int] = (-1, -1)


@dataclass
class OverlayRegion:
    """A closed dual face (centres of the polygons around a vertex, CCW)."""
    id: str
    points: List[Point]
    source_vertex: Point = (0.0, 0.0)
    source_polygon_ids: Tuple[int, ...] = ()


@dataclass
class Overlay:
    """Container for derived geometry that can be drawn over a tiling."""
    kind: str
    points: List[OverlayPoint] = field(default_factory=list)
    segments: List[OverlaySegment] = field(default_factory=list)
    regions: List[OverlayRegion] = field(default_factory=list)
    metadata: Dict[str, object] = field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════
# Dual transform
# ═══════════════════════════════════════════════════════════════════

def dual_overlay(model: "Model") -> Overlay:
    """Compute the dual of *model*'s tiling."""
    graph = model.graph
    eps = graph.config.epsilon
    overlay = Overlay(kind="dual")

    centers: Dict[int, Point] = {}
    for polygon in graph:
        centers[polygon.id] = polygon.center
        overlay.points.append(OverlayPoint(
            id=f"dc_{polygon.id}",
            x=polygon.center[0], y=polygon.center[1],
            label=str(polygon.id),
            source_polygon_id=polygon.id,
        ))

    for idx, (a, b) in enumerate(sorted(graph.dual_edges())):
        overlay.segments.append(OverlaySegment(
            id=f"ds_{idx}",
            start=centers[a], end=centers[b],
            source_polygon_ids=(a, b),
        ))

    # Cluster coincident vertices; each cluster collects its polygons.
    clusters: SpatialHash[int] = SpatialHash(graph.config.edge_cell_size)
    cluster_points: List[Point] = []
    incident: List[List[int]] = []
    for polygon in graph:
        for vertex in vertices(polygon):
            cluster = _find_cluster(clusters, vertex, eps)
            if cluster is None:
                cluster = len(cluster_points)
                clusters.insert(vertex, cluster)
                cluster_points.append(vertex)
                incident.append([])
            incident[cluster].append(polygon.id)

    for cluster, (vx, vy) in enumerate(cluster_points):
        polygon_ids = incident[cluster]
        if len(polygon_ids) < 3:
            continue
        angle_sum = sum(interior_angle(graph[pid].sides) for pid in polygon_ids)
        if abs(angle_sum - 2.0 * math.pi) > _ANGLE_TOLERANCE:
            continue
        ordered = sorted(
            polygon_ids,
            key=lambda pid: math.atan2(centers[pid][1] - vy, centers[pid][0] - vx),
        )
        overlay.regions.append(OverlayRegion(
            id=f"dr_{len(overlay.regions)}",
            points=[centers[pid] for pid in ordered],
            source_vertex=(vx, vy),
            source_polygon_ids=tuple(ordered),
        ))

    overlay.metadata["n_sites"] = len(overlay.points)
    overlay.metadata["n_segments"] = len(overlay.segments)
    overlay.metadata["n_regions"] = len(overlay.regions)

    return overlay


def _find_cluster(clusters: SpatialHash[int], point: Point, eps: float) -> int | None:
    for anchor, cluster in clusters.query(point, eps):
        if points_close(anchor, point, eps):
            return cluster
    return None
