"""polytiling — tilings of regular polygons and their duals.

Public API is organised into layers:

- **Core** — shapes, polygons, geometry kernel, adjacency index, graph
- **Construction** — the :class:`Model` (``add``, ``add_multi``, ``repeat``)
- **Derived** — dual tiling overlay and diagnostics
- **Collaborators** — colours, JSON I/O, built-in recipes, rendering
  (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .errors import (
    TilingError,
    NotEmptyError,
    EmptyModelError,
    IndexOutOfRange,
    OverlapError,
    DegenerateMotifError,
    InvalidShapeError,
    InvalidColorError,
)
from .config import TilingConfig, DEFAULT_CONFIG, STRICT_CONFIG
from .models import Shape, Polygon, EdgeRef
from .geometry import (
    EDGE_LENGTH,
    circumradius,
    apothem,
    vertices,
    edge_endpoints,
    attach_transform,
)
from .index import SpatialHash, AdjacencyIndex
from .graph import TilingGraph

# ── Construction ────────────────────────────────────────────────────
from .model import Model
from .motif import derive_translations, replicate

# ── Derived ─────────────────────────────────────────────────────────
from .dual import Overlay, OverlayPoint, OverlaySegment, OverlayRegion, dual_overlay
from .diagnostics import (
    edge_length_stats,
    double_claims,
    uncovered_edges,
    coverage_ratio,
    diagnostics_report,
)

# ── Collaborators ───────────────────────────────────────────────────
from .color import Color
from .io import load_json, save_json
from .recipes import RECIPES, Palette, build_recipe

# ── Rendering (requires matplotlib) ────────────────────────────────
from .render import render_png, render_dual_png

__all__ = [
    # Core
    "TilingError",
    "NotEmptyError",
    "EmptyModelError",
    "IndexOutOfRange",
    "OverlapError",
    "DegenerateMotifError",
    "InvalidShapeError",
    "InvalidColorError",
    "TilingConfig",
    "DEFAULT_CONFIG",
    "STRICT_CONFIG",
    "Shape",
    "Polygon",
    "EdgeRef",
    "EDGE_LENGTH",
    "circumradius",
    "apothem",
    "vertices",
    "edge_endpoints",
    "attach_transform",
    "SpatialHash",
    "AdjacencyIndex",
    "TilingGraph",
    # Construction
    "Model",
    "derive_translations",
    "replicate",
    # Derived
    "Overlay",
    "OverlayPoint",
    "OverlaySegment",
    "OverlayRegion",
    "dual_overlay",
    "edge_length_stats",
    "double_claims",
    "uncovered_edges",
    "coverage_ratio",
    "diagnostics_report",
    # Collaborators
    "Color",
    "load_json",
    "save_json",
    "RECIPES",
    "Palette",
    "build_recipe",
    "render_png",
    "render_dual_png",
]
