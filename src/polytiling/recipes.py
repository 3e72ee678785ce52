"""Ready-made tilings built with the attachment API.

Each recipe places a centre polygon, attaches rings of polygons with
``add_multi``, and finishes with ``repeat`` over the polygons that mark
where the pattern recurs.  They double as worked examples of edge
indexing: edge 0 of an attached polygon is always the shared edge, and
the remaining edges follow counter-clockwise.

>>> model = build_recipe("3.4.6.4")
>>> len(model) > 50
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .color import Color
from .config import TilingConfig
from .model import Model
from .models import Shape


@dataclass(frozen=True)
class Palette:
    background: Color
    stroke: Color
    fill_0: Color
    fill_1: Color
    fill_2: Color


INTRO_PALETTE = Palette(
    background=Color(242, 242, 242),
    stroke=Color(242, 60, 60),
    fill_0=Color(242, 194, 106),
    fill_1=Color(23, 216, 146),
    fill_2=Color(242, 209, 48),
)

EXAMPLE_PALETTE = Palette(
    background=Color(56, 103, 165),
    stroke=Color(242, 205, 21),
    fill_0=Color(242, 174, 45),
    fill_1=Color(216, 140, 73),
    fill_2=Color(191, 86, 47),
)


def build_3464(
    width: int = 1024,
    height: int = 1024,
    scale: float = 128.0,
    palette: Palette = INTRO_PALETTE,
    repeat: bool = True,
    config: Optional[TilingConfig] = None,
) -> Model:
    """Rhombitrihexagonal tiling: hexagon, squares, triangles, hexagons."""
    model = Model(width, height, scale, config=config)
    model.add(Shape(6, palette.fill_0, palette.stroke))
    squares = model.add_multi(range(0, 1), range(0, 6), Shape(4, palette.fill_1, palette.stroke))
    model.add_multi(squares, range(1, 2), Shape(3, palette.fill_2, palette.stroke))
    hexagons = model.add_multi(squares, range(2, 3), Shape(6, palette.fill_0, palette.stroke))
    if repeat:
        model.repeat(hexagons)
    return model


def build_3636(
    width: int = 1024,
    height: int = 1024,
    scale: float = 128.0,
    palette: Palette = EXAMPLE_PALETTE,
    repeat: bool = True,
    config: Optional[TilingConfig] = None,
) -> Model:
    """Trihexagonal tiling."""
    model = Model(width, height, scale, config=config)
    model.add(Shape(6, palette.fill_1, palette.stroke))
    a = model.add_multi(range(0, 1), range(0, 6), Shape(3, palette.fill_0, palette.stroke))
    b = model.add_multi(a, range(1, 2), Shape(6, palette.fill_1, palette.stroke))
    if repeat:
        model.repeat(b)
    return model


def build_33434(
    width: int = 1024,
    height: int = 1024,
    scale: float = 128.0,
    palette: Palette = EXAMPLE_PALETTE,
    repeat: bool = True,
    config: Optional[TilingConfig] = None,
) -> Model:
    """Snub square tiling."""
    model = Model(width, height, scale, config=config)
    model.add(Shape(4, palette.fill_1, palette.stroke))
    a = model.add_multi(range(0, 1), range(0, 4), Shape(3, palette.fill_2, palette.stroke))
    b = model.add_multi(a, range(1, 2), Shape(4, palette.fill_1, palette.stroke))
    c = model.add_multi(b, range(2, 4), Shape(3, palette.fill_2, palette.stroke))
    d = model.add_multi(c, range(2, 3), Shape(4, palette.fill_1, palette.stroke))
    if repeat:
        model.repeat(d)
    return model


def build_33336(
    width: int = 1024,
    height: int = 1024,
    scale: float = 128.0,
    palette: Palette = EXAMPLE_PALETTE,
    repeat: bool = True,
    config: Optional[TilingConfig] = None,
) -> Model:
    """Snub hexagonal tiling."""
    model = Model(width, height, scale, config=config)
    model.add(Shape(6, palette.fill_2, palette.stroke))
    a = model.add_multi(range(0, 1), range(0, 6), Shape(3, palette.fill_0, palette.stroke))
    model.add_multi(a, range(1, 2), Shape(3, palette.fill_0, palette.stroke))
    c = model.add_multi(a, range(2, 3), Shape(3, palette.fill_0, palette.stroke))
    d = model.add_multi(c, range(1, 2), Shape(6, palette.fill_2, palette.stroke))
    if repeat:
        model.repeat(d)
    return model


def build_333333(
    width: int = 1024,
    height: int = 1024,
    scale: float = 128.0,
    palette: Palette = EXAMPLE_PALETTE,
    repeat: bool = True,
    config: Optional[TilingConfig] = None,
) -> Model:
    """Triangular tiling."""
    model = Model(width, height, scale, config=config)
    model.add(Shape(3, palette.fill_2, palette.stroke))
    a = model.add_multi(range(0, 1), range(0, 3), Shape(3, palette.fill_1, palette.stroke))
    b = model.add_multi(a, range(1, 3), Shape(3, palette.fill_2, palette.stroke))
    if repeat:
        model.repeat(b)
    return model


RECIPES: Dict[str, Callable[..., Model]] = {
    "3.4.6.4": build_3464,
    "3.6.3.6": build_3636,
    "3.3.4.3.4": build_33434,
    "3.3.3.3.6": build_33336,
    "3.3.3.3.3.3": build_333333,
}

RECIPE_PALETTES: Dict[str, Palette] = {
    "3.4.6.4": INTRO_PALETTE,
    "3.6.3.6": EXAMPLE_PALETTE,
    "3.3.4.3.4": EXAMPLE_PALETTE,
    "3.3.3.3.6": EXAMPLE_PALETTE,
    "3.3.3.3.3.3": EXAMPLE_PALETTE,
}


def build_recipe(name: str, **kwargs) -> Model:
    """Build the named tiling; see :data:`RECIPES` for the names."""
    try:
        builder = RECIPES[name]
    except KeyError:
        raise KeyError(f"No recipe named {name!r}; choose from {sorted(RECIPES)}") from None
    return builder(**kwargs)
