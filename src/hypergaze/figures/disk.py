"""Disk-shaped figures in the Poincare disk.

HyperbolicDisk is a geodesic circle: every boundary sample sits at the
same hyperbolic distance from its center, so it shrinks visually near
the rim of the Poincare disk. PlanarDisk is a plain Euclidean circle,
used for the background that marks the disk boundary itself.

Both expose `vertices`, an (N + 2, 2) array ordered as a triangle fan:
hub, boundary samples 1..N, then sample 1 again to close the loop.
"""

from typing import Optional, Tuple
import logging
import math

import numpy as np

from ..geometry import HyperbolicError, HyperbolicPoint
from ..render import Color, RenderTarget

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = 100

# Hyperbolic distance from the origin beyond which a disk will not move.
# Past about 12 the hyperboloid coordinates lose float64 precision.
DEFAULT_MAX_REACH = 10.0


def _check_radius(radius: float) -> float:
    radius = float(radius)
    if not math.isfinite(radius) or radius < 0.0:
        raise ValueError(f"Radius must be a finite non-negative number, got {radius}")
    return radius


def _check_samples(samples: int) -> int:
    if samples < 3:
        raise ValueError(f"A disk boundary needs at least 3 samples, got {samples}")
    return int(samples)


def _check_amount(amount: float, what: str) -> float:
    amount = float(amount)
    if not math.isfinite(amount) or amount < 0.0:
        raise ValueError(f"{what} must be a finite non-negative number, got {amount}")
    return amount


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class HyperbolicDisk:
    """A geodesic disk anchored at a HyperbolicPoint.

    The center point is owned by the disk: set_center stores a copy and
    `center` hands out copies. Boundary vertices are a cache derived from
    center and radius; any mutation drops the cache and the next read of
    `vertices` (or an explicit recompute()) rebuilds it.

    Motion is bounded by max_reach, a hyperbolic distance from the
    origin. A step that would end beyond it is refused: the center stays
    where it is and the move reports False.
    """

    def __init__(
        self,
        radius: float,
        center: HyperbolicPoint,
        color: Color,
        samples: int = DEFAULT_SAMPLES,
        max_reach: float = DEFAULT_MAX_REACH,
    ):
        self._radius = _check_radius(radius)
        self._center = center.copy()
        self.color = color
        self.samples = _check_samples(samples)
        max_reach = float(max_reach)
        if not math.isfinite(max_reach) or max_reach <= 0.0:
            raise ValueError(f"max_reach must be a finite positive number, got {max_reach}")
        self.max_reach = max_reach
        self._max_height = math.cosh(max_reach)
        self._blocked = False
        self._vertices: Optional[np.ndarray] = None
        self.recompute()

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def center(self) -> HyperbolicPoint:
        return self._center.copy()

    @property
    def planar_center(self) -> Tuple[float, float]:
        return self._center.to_plane()

    @property
    def is_stale(self) -> bool:
        return self._vertices is None

    @property
    def vertices(self) -> np.ndarray:
        if self._vertices is None:
            self.recompute()
        return _readonly(self._vertices)

    def recompute(self):
        """Resample the boundary from the current center and radius."""
        n = self.samples
        verts = np.empty((n + 2, 2), dtype=np.float64)
        verts[0] = self._center.to_plane()
        step = 2.0 * math.pi / n
        for i in range(1, n + 1):
            verts[i] = self._center.advance_rotated(self._radius, step * i).to_plane()
        verts[n + 1] = verts[1]
        self._vertices = verts

    def invalidate(self):
        self._vertices = None

    def set_center(self, center: HyperbolicPoint):
        self._center = center.copy()
        self.invalidate()

    def set_radius(self, radius: float):
        self._radius = _check_radius(radius)
        self.invalidate()

    def _move(self, t: float) -> bool:
        try:
            moved = self._center.advance(t)
        except HyperbolicError as exc:
            moved = None
            reason = str(exc)
        else:
            reason = f"distance from origin would exceed {self.max_reach}"
        if moved is None or moved.position[2] > self._max_height:
            if not self._blocked:
                logger.warning("Refusing move of %.4g from %r: %s", t, self, reason)
            self._blocked = True
            return False
        self._blocked = False
        self._center = moved
        self.invalidate()
        return True

    def move_forward(self, distance: float) -> bool:
        return self._move(_check_amount(distance, "Distance"))

    def move_backward(self, distance: float) -> bool:
        return self._move(-_check_amount(distance, "Distance"))

    def rotate_left(self, angle: float):
        self._center.rotate(_check_amount(angle, "Angle"))
        self.invalidate()

    def rotate_right(self, angle: float):
        self._center.rotate(-_check_amount(angle, "Angle"))
        self.invalidate()

    def draw(self, target: RenderTarget):
        target.draw_triangle_fan(self.vertices, self.color)

    def __repr__(self) -> str:
        x, y = self.planar_center
        return f"HyperbolicDisk(radius={self._radius:.4f}, center=({x:.4f}, {y:.4f}))"


class PlanarDisk:
    """A Euclidean circle in disk coordinates, with a translation offset."""

    def __init__(
        self,
        radius: float,
        x: float = 0.0,
        y: float = 0.0,
        color: Color = Color(0.0, 0.0, 0.0),
        samples: int = DEFAULT_SAMPLES,
    ):
        self.radius = _check_radius(radius)
        self.x = float(x)
        self.y = float(y)
        self.offset = (0.0, 0.0)
        self.color = color
        self.samples = _check_samples(samples)
        self._vertices = self._build()

    def _build(self) -> np.ndarray:
        n = self.samples
        cx = self.x + self.offset[0]
        cy = self.y + self.offset[1]
        angles = 2.0 * math.pi / n * np.arange(1, n + 1)
        verts = np.empty((n + 2, 2), dtype=np.float64)
        verts[0] = (cx, cy)
        verts[1:n + 1, 0] = cx + self.radius * np.cos(angles)
        verts[1:n + 1, 1] = cy + self.radius * np.sin(angles)
        verts[n + 1] = verts[1]
        return verts

    @property
    def vertices(self) -> np.ndarray:
        return _readonly(self._vertices)

    @property
    def coords(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def set_coords(self, x: float, y: float):
        self.x = float(x)
        self.y = float(y)
        self._vertices = self._build()

    def set_offset(self, dx: float, dy: float):
        self.offset = (float(dx), float(dy))
        self._vertices = self._build()

    def draw(self, target: RenderTarget):
        target.draw_triangle_fan(self.vertices, self.color)
