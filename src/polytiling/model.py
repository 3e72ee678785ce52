from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from .color import Color
from .config import TilingConfig
from .errors import EmptyModelError, IndexOutOfRange, NotEmptyError
from .geometry import attach_transform, vertices
from .graph import TilingGraph
from .models import Polygon, Shape
from .motif import derive_translations, replicate

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Box = Tuple[float, float, float, float]


class Model:
    """A tiling under construction plus the canvas it must cover.

    A model is built imperatively: :meth:`add` places the first polygon,
    :meth:`add_multi` attaches polygons to edges of existing ones, and
    :meth:`repeat` copies the resulting pattern across the canvas.  Every
    call either fully succeeds or leaves the model untouched.

    *width* and *height* are in pixels; *scale* is pixels per model unit.
    The canvas is centred on the origin.
    """

    VERSION = "1.0"

    def __init__(
        self,
        width: int,
        height: int,
        scale: float,
        config: Optional[TilingConfig] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if scale <= 0.0:
            raise ValueError("scale must be > 0")
        self.width = width
        self.height = height
        self.scale = float(scale)
        self.graph = TilingGraph(config)

    @property
    def config(self) -> TilingConfig:
        return self.graph.config

    def __len__(self) -> int:
        return len(self.graph)

    # ── construction ────────────────────────────────────────────────

    def add(self, shape: Shape) -> int:
        """Place *shape* at the origin with orientation 0; returns id 0."""
        if not self.graph.is_empty():
            raise NotEmptyError(len(self.graph))
        polygon_id = self.graph.insert(shape.sides, (0.0, 0.0), 0.0, shape.fill, shape.stroke)
        logger.debug("added %d-gon as polygon %d", shape.sides, polygon_id)
        return polygon_id

    def add_multi(self, shape_ids: Iterable[int], edge_ids: Iterable[int], shape: Shape) -> range:
        """Attach *shape* to every edge in *edge_ids* of each shape in *shape_ids*.

        Pairs are visited in ascending shape id, then edge index.  A
        placement that coincides with an existing polygon is skipped, so
        repeating a call inserts nothing.  Returns the range of new ids.
        """
        if self.graph.is_empty():
            raise EmptyModelError("add_multi")

        shape_ids = sorted(set(shape_ids))
        edge_ids = sorted(set(edge_ids))
        parents = [self.graph[sid] for sid in shape_ids]
        for parent in parents:
            for edge in edge_ids:
                if not 0 <= edge < parent.sides:
                    raise IndexOutOfRange(edge, parent.sides, "shape edges")

        start = len(self.graph)
        with self.graph.transaction():
            for parent in parents:
                for edge in edge_ids:
                    self._attach(parent, edge, shape)
        end = len(self.graph)

        logger.debug(
            "add_multi %d-gon on %d shape(s) x %d edge(s): ids %d..%d",
            shape.sides, len(parents), len(edge_ids), start, end,
        )
        return range(start, end)

    def _attach(self, parent: Polygon, edge: int, shape: Shape) -> Optional[int]:
        center, orientation = attach_transform(parent, edge, shape.sides)
        existing = self.graph.index.find_coincident_polygon(center, orientation, shape.sides)
        if existing is not None:
            return None
        return self.graph.insert(shape.sides, center, orientation, shape.fill, shape.stroke)

    def repeat(self, seed_ids: Iterable[int]) -> None:
        """Fill the canvas with the pattern whose repeat positions are *seed_ids*."""
        if self.graph.is_empty():
            raise EmptyModelError("repeat")
        seed_ids = sorted(set(seed_ids))
        translations = derive_translations(self.graph, seed_ids)
        with self.graph.transaction():
            replicate(
                self.graph,
                translations,
                self.canvas_bounds(),
                max_insertions=self.config.max_insertions,
            )

    # ── read-only snapshot ──────────────────────────────────────────

    @property
    def polygons(self) -> Tuple[Polygon, ...]:
        return self.graph.polygons

    def polygon(self, polygon_id: int) -> Polygon:
        return self.graph[polygon_id]

    def vertices(self, polygon_id: int) -> List[Point]:
        return vertices(self.graph[polygon_id])

    def dual_edges(self) -> Set[Tuple[int, int]]:
        return self.graph.dual_edges()

    def validate(self) -> List[str]:
        return self.graph.validate()

    def canvas_bounds(self) -> Box:
        """Canvas as ``(min_x, min_y, max_x, max_y)`` in model units."""
        w = self.width / 2.0 / self.scale
        h = self.height / 2.0 / self.scale
        return (-w, -h, w, h)

    def to_pixels(self, point: Point) -> Point:
        """Map a model point to pixel space (origin at the canvas corner)."""
        return (
            self.width / 2.0 + point[0] * self.scale,
            self.height / 2.0 + point[1] * self.scale,
        )

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self, include_adjacency: bool = True) -> dict:
        data: Dict[str, Any] = {
            "version": self.VERSION,
            "canvas": {"width": self.width, "height": self.height, "scale": self.scale},
            "config": asdict(self.config),
            "polygons": [
                {
                    "id": p.id,
                    "sides": p.sides,
                    "center": [p.center[0], p.center[1]],
                    "orientation": p.orientation,
                    "fill": _encode_attr(p.fill),
                    "stroke": _encode_attr(p.stroke),
                }
                for p in self.polygons
            ],
        }
        if include_adjacency:
            data["adjacency"] = [
                [a.polygon_id, a.edge_index, b.polygon_id, b.edge_index]
                for a, b in self.graph.adjacency_pairs()
            ]
        return data

    @classmethod
    def from_dict(cls, payload: dict) -> "Model":
        """Rebuild a model; adjacency is recomputed from the geometry."""
        canvas = payload["canvas"]
        config = TilingConfig(**payload["config"]) if "config" in payload else None
        model = cls(canvas["width"], canvas["height"], canvas["scale"], config=config)
        with model.graph.transaction():
            for expected, item in enumerate(sorted(payload.get("polygons", []), key=lambda p: p["id"])):
                if item["id"] != expected:
                    raise ValueError(f"polygon ids must be contiguous from 0; got {item['id']} at {expected}")
                model.graph.insert(
                    item["sides"],
                    (float(item["center"][0]), float(item["center"][1])),
                    float(item["orientation"]),
                    _decode_attr(item.get("fill")),
                    _decode_attr(item.get("stroke")),
                )
        return model

    def to_json(self, include_adjacency: bool = True, indent: int = 2) -> str:
        return json.dumps(
            self.to_dict(include_adjacency=include_adjacency),
            indent=indent,
            sort_keys=True,
        )

    @classmethod
    def from_json(cls, json_data: str) -> "Model":
        return cls.from_dict(json.loads(json_data))


def _encode_attr(value: Any) -> Any:
    if isinstance(value, Color):
        return {"rgb": [value.red, value.green, value.blue]}
    return value


def _decode_attr(value: Any) -> Any:
    if isinstance(value, dict) and "rgb" in value:
        return Color(*value["rgb"])
    return value
