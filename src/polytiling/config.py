"""Engine tunables.

>>> from polytiling import Model, TilingConfig
>>> model = Model(1024, 1024, 128.0, config=TilingConfig(epsilon=1e-7))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TilingConfig:
    """Tolerances and index granularity for a model.

    Attributes
    ----------
    epsilon : float
        Absolute tolerance, in model units, for every point and angle
        comparison.  Composed rotations accumulate rounding error, so no
        comparison is ever exact.
    edge_cell_size : float
        Cell size of the spatial hash that stores edge midpoints.
    polygon_cell_size : float
        Cell size of the spatial hash that stores polygon centres.
    max_insertions : int, optional
        Upper bound on polygons inserted by a single ``repeat`` call.
        ``None`` leaves ``repeat`` bounded only by the canvas.
    """

    epsilon: float = 1e-6
    edge_cell_size: float = 0.5
    polygon_cell_size: float = 1.0
    max_insertions: Optional[int] = None

    def __post_init__(self) -> None:
        if self.epsilon <= 0.0:
            raise ValueError("epsilon must be > 0")
        if self.edge_cell_size <= self.epsilon or self.polygon_cell_size <= self.epsilon:
            raise ValueError("cell sizes must be larger than epsilon")
        if self.max_insertions is not None and self.max_insertions < 0:
            raise ValueError("max_insertions must be >= 0")


DEFAULT_CONFIG = TilingConfig()

STRICT_CONFIG = TilingConfig(epsilon=1e-9, max_insertions=10_000)
