"""Breadcrumb path of an entity in disk coordinates."""

from typing import Iterator, List, Optional, Sequence, Tuple
import math

import numpy as np

from ..render import Color, RenderTarget, WHITE


class Trail:
    """Append-only ordered list of planar points, drawn as a line strip."""

    def __init__(self, color: Color = WHITE):
        self.color = color
        self._points: List[Tuple[float, float]] = []

    def append(self, xy: Sequence[float]):
        x, y = (float(c) for c in xy)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Trail point must be finite, got ({x}, {y})")
        self._points.append((x, y))

    @property
    def points(self) -> np.ndarray:
        if not self._points:
            return np.zeros((0, 2))
        return np.array(self._points)

    @property
    def last(self) -> Optional[Tuple[float, float]]:
        return self._points[-1] if self._points else None

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(list(self._points))

    def draw(self, target: RenderTarget):
        if self._points:
            target.draw_line_strip(self.points, self.color)
