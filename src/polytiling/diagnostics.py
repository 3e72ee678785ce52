from __future__ import annotations

import math
from collections import Counter
from typing import TYPE_CHECKING, Dict, List

import numpy as np

from .geometry import bounding_box, point_in_convex_polygon, vertices
from .models import EdgeRef

if TYPE_CHECKING:
    from .model import Model


def shared_edge_lengths(model: "Model") -> np.ndarray:
    """Lengths of every shared edge as seen from each side, shape ``(n, 2)``."""
    graph = model.graph
    rows: List[List[float]] = []
    for a, b in graph.adjacency_pairs():
        rows.append([_edge_length(graph.index.edge_endpoints(a)), _edge_length(graph.index.edge_endpoints(b))])
    return np.asarray(rows, dtype=float).reshape(-1, 2)


def edge_length_stats(model: "Model") -> Dict[str, float]:
    lengths = shared_edge_lengths(model)
    if lengths.size == 0:
        return {"count": 0, "min": 0.0, "max": 0.0, "mean": 0.0, "max_mismatch": 0.0}
    return {
        "count": int(lengths.shape[0]),
        "min": float(lengths.min()),
        "max": float(lengths.max()),
        "mean": float(lengths.mean()),
        "max_mismatch": float(np.abs(lengths[:, 0] - lengths[:, 1]).max()),
    }


def double_claims(model: "Model") -> List[EdgeRef]:
    """Edges that more than one other polygon edge coincides with."""
    graph = model.graph
    claims: List[EdgeRef] = []
    for polygon in graph:
        pts = vertices(polygon)
        for i in range(polygon.sides):
            hits = graph.index.find_coincident_edge(pts[i], pts[(i + 1) % polygon.sides])
            others = [ref for ref in hits if ref.polygon_id != polygon.id]
            if len(others) > 1:
                claims.append(EdgeRef(polygon.id, i))
    return claims


def uncovered_edges(model: "Model") -> List[EdgeRef]:
    """Unmatched edges of polygons lying wholly inside the canvas.

    After ``repeat`` on a valid motif this is empty: the neighbour across
    such an edge touches the canvas and would have been placed.
    """
    graph = model.graph
    eps = graph.config.epsilon
    min_x, min_y, max_x, max_y = model.canvas_bounds()
    found: List[EdgeRef] = []
    for polygon in graph:
        bx0, by0, bx1, by1 = bounding_box(vertices(polygon))
        if bx0 < min_x - eps or by0 < min_y - eps or bx1 > max_x + eps or by1 > max_y + eps:
            continue
        for i in range(polygon.sides):
            ref = EdgeRef(polygon.id, i)
            if graph.edge_partner(ref) is None:
                found.append(ref)
    return found


def coverage_ratio(model: "Model", samples: int = 32) -> float:
    """Fraction of a ``samples × samples`` grid of canvas points covered by polygons."""
    graph = model.graph
    eps = graph.config.epsilon
    if graph.is_empty():
        return 0.0
    min_x, min_y, max_x, max_y = model.canvas_bounds()
    xs = np.linspace(min_x, max_x, samples)
    ys = np.linspace(min_y, max_y, samples)
    covered = 0
    for x in xs:
        for y in ys:
            point = (float(x), float(y))
            for pid in graph.index.nearby_polygons(point, 0.0):
                if point_in_convex_polygon(point, vertices(graph[pid]), eps):
                    covered += 1
                    break
    return covered / float(samples * samples)


def diagnostics_report(model: "Model", samples: int = 32) -> Dict[str, object]:
    """Build a structured diagnostics report suitable for JSON export."""
    graph = model.graph
    by_sides = Counter(p.sides for p in graph)
    return {
        "polygon_count": len(graph),
        "polygons_by_sides": {str(k): v for k, v in sorted(by_sides.items())},
        "dual_edge_count": len(graph.dual_edges()),
        "boundary_edge_count": len(graph.boundary_edges()),
        "edge_lengths": edge_length_stats(model),
        "double_claims": len(double_claims(model)),
        "uncovered_edges": len(uncovered_edges(model)),
        "coverage": coverage_ratio(model, samples=samples),
        "errors": graph.validate(),
    }


def _edge_length(endpoints) -> float:
    (x0, y0), (x1, y1) = endpoints
    return math.hypot(x1 - x0, y1 - y0)
