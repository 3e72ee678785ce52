from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple

import numpy as np

from .color import Color
from .dual import dual_overlay
from .geometry import inset_vertices

if TYPE_CHECKING:
    from .model import Model

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

DEFAULT_BACKGROUND = Color(242, 242, 242)
DEFAULT_FILL = Color(242, 194, 106)
DEFAULT_STROKE = Color(242, 60, 60)


def _ensure_mpl():
    """Lazy-import matplotlib; raise helpful error if missing."""
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
        return plt, Polygon
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc


def render_png(
    model: "Model",
    output_path: str | Path,
    background: Any = DEFAULT_BACKGROUND,
    margin: float = 0.1,
    line_width: float = 0.1,
    show_labels: bool = False,
    dpi: int = 100,
) -> None:
    """Render the tiling to a ``width × height`` pixel PNG.

    *margin* insets every polygon (model units); *line_width* is in model
    units too.  With *show_labels* each polygon is labelled with its id and
    each edge with its index, which is what ``add_multi`` ranges refer to.
    """
    plt, Polygon = _ensure_mpl()
    fig, ax = _canvas(plt, model, background, dpi)
    lw = _points(model, line_width, dpi)
    font = 18.0 * 72.0 / dpi

    for polygon in model.polygons:
        pts = np.asarray(inset_vertices(polygon, margin))
        ax.add_patch(Polygon(
            pts, closed=True,
            facecolor=_mpl_color(polygon.fill, DEFAULT_FILL),
            edgecolor=_mpl_color(polygon.stroke, DEFAULT_STROKE),
            linewidth=lw, joinstyle="round", capstyle="round",
        ))

    if show_labels:
        for polygon in model.polygons:
            cx, cy = polygon.center
            ax.text(cx, cy, str(polygon.id), fontsize=font, ha="center", va="center", color="black")
            edge_pts = inset_vertices(polygon, margin + 0.15)
            for i in range(polygon.sides):
                (x0, y0), (x1, y1) = edge_pts[i], edge_pts[(i + 1) % polygon.sides]
                ax.text((x0 + x1) / 2, (y0 + y1) / 2, str(i), fontsize=font * 0.6,
                        ha="center", va="center", color="black")

    _save(plt, fig, output_path, dpi)


def render_dual_png(
    model: "Model",
    output_path: str | Path,
    background: Any = DEFAULT_BACKGROUND,
    fill: Any = DEFAULT_FILL,
    stroke: Any = DEFAULT_STROKE,
    margin: float = 0.1,
    line_width: float = 0.1,
    dpi: int = 100,
) -> None:
    """Render the dual tiling: one face per completely surrounded vertex."""
    plt, Polygon = _ensure_mpl()
    overlay = dual_overlay(model)
    fig, ax = _canvas(plt, model, background, dpi)
    lw = _points(model, line_width, dpi)

    for region in overlay.regions:
        pts = region.points if margin == 0.0 else _inset_region(region.points, margin)
        ax.add_patch(Polygon(
            np.asarray(pts), closed=True,
            facecolor=_mpl_color(fill, DEFAULT_FILL),
            edgecolor=_mpl_color(stroke, DEFAULT_STROKE),
            linewidth=lw, joinstyle="round", capstyle="round",
        ))

    _save(plt, fig, output_path, dpi)


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════

def _canvas(plt, model: "Model", background: Any, dpi: int):
    fig = plt.figure(figsize=(model.width / dpi, model.height / dpi), dpi=dpi)
    face = _mpl_color(background, DEFAULT_BACKGROUND)
    fig.patch.set_facecolor(face)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_facecolor(face)
    min_x, min_y, max_x, max_y = model.canvas_bounds()
    ax.set_xlim(min_x, max_x)
    # Pixel rows grow downward.
    ax.set_ylim(max_y, min_y)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig, ax


def _save(plt, fig, output_path: str | Path, dpi: int) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Saved %s", output_path)


def _points(model: "Model", width: float, dpi: int) -> float:
    """Convert a model-unit line width to matplotlib points."""
    return width * model.scale * 72.0 / dpi


def _mpl_color(value: Any, default: Color) -> Any:
    if value is None:
        return default.hex
    if isinstance(value, Color):
        return value.hex
    return value


def _inset_region(points: Sequence[Point], margin: float) -> List[Point]:
    """Move every edge of a CCW polygon inward by *margin*."""
    n = len(points)
    lines: List[Tuple[Point, Point]] = []
    for i in range(n):
        (x0, y0), (x1, y1) = points[i], points[(i + 1) % n]
        dx, dy = x1 - x0, y1 - y0
        length = math.hypot(dx, dy) or 1.0
        nx, ny = -dy / length, dx / length
        lines.append(((x0 + nx * margin, y0 + ny * margin), (dx, dy)))

    out: List[Point] = []
    for i in range(n):
        (ax, ay), (adx, ady) = lines[i - 1]
        (bx, by), (bdx, bdy) = lines[i]
        cross = adx * bdy - ady * bdx
        if abs(cross) < 1e-12:
            out.append((bx, by))
            continue
        t = ((bx - ax) * bdy - (by - ay) * bdx) / cross
        out.append((ax + adx * t, ay + ady * t))
    return out
