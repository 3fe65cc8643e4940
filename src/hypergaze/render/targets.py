"""Rendering capability handed to drawables.

The geometry kernel never talks to a graphics API. Anything that can be
drawn receives a RenderTarget and hands it Poincare disk coordinates:

- triangle fans: [hub, boundary 1 .. N, boundary 1], one per disk
- line strips: trail breadcrumbs in order

Two targets ship with the package:
1. RecordingRenderer: keeps every draw call, for tests and inspection
2. MatplotlibRenderer: rasterizes a frame to an image file
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, Union
import numpy as np

# Conditional matplotlib import for environments without display
try:
    import matplotlib.pyplot as plt
    from matplotlib.patches import Polygon
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False


@dataclass(frozen=True)
class Color:
    """RGBA color, components in [0, 1]."""
    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Color component {name}={value} outside [0, 1]")

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)


WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


class RenderTarget(Protocol):
    """What a drawable needs from the renderer."""

    def draw_triangle_fan(self, vertices: np.ndarray, color: Color) -> None:
        ...

    def draw_line_strip(self, points: np.ndarray, color: Color) -> None:
        ...


@dataclass
class DrawCall:
    """A single recorded draw call."""
    primitive: str          # "triangle_fan" or "line_strip"
    vertices: np.ndarray    # (n, 2) planar coordinates
    color: Color


@dataclass
class RecordingRenderer:
    """Render target that records draw calls instead of rasterizing."""
    calls: List[DrawCall] = field(default_factory=list)

    def draw_triangle_fan(self, vertices: np.ndarray, color: Color) -> None:
        self.calls.append(DrawCall("triangle_fan", np.array(vertices, copy=True), color))

    def draw_line_strip(self, points: np.ndarray, color: Color) -> None:
        self.calls.append(DrawCall("line_strip", np.array(points, copy=True), color))

    @property
    def fans(self) -> List[DrawCall]:
        return [c for c in self.calls if c.primitive == "triangle_fan"]

    @property
    def strips(self) -> List[DrawCall]:
        return [c for c in self.calls if c.primitive == "line_strip"]

    def clear(self):
        self.calls.clear()


class MatplotlibRenderer:
    """Rasterize frames with matplotlib.

    Fans become filled polygons (the hub is dropped, the boundary ring is
    the outline) and strips become polylines, on a square canvas
    covering [-1, 1] x [-1, 1].
    """

    def __init__(
        self,
        size_inches: float = 6.0,
        background: Color = Color(0.5, 0.5, 0.5),
    ):
        if not HAS_MATPLOTLIB:
            raise ImportError(
                "matplotlib is required for frame rendering. "
                "Install with: pip install hypergaze[viz]"
            )
        self.background = background
        self.fig, self.ax = plt.subplots(figsize=(size_inches, size_inches))
        self.clear()

    def clear(self):
        self.ax.clear()
        self.ax.set_xlim(-1.0, 1.0)
        self.ax.set_ylim(-1.0, 1.0)
        self.ax.set_aspect("equal")
        self.ax.axis("off")
        self.fig.patch.set_facecolor(self.background.rgb)
        self._zorder = 0

    def _next_zorder(self) -> int:
        # Later calls paint over earlier ones, like the GPU draw order
        self._zorder += 1
        return self._zorder

    def draw_triangle_fan(self, vertices: np.ndarray, color: Color) -> None:
        ring = np.asarray(vertices)[1:]
        self.ax.add_patch(Polygon(
            ring,
            closed=True,
            facecolor=color.rgb,
            edgecolor="none",
            zorder=self._next_zorder(),
        ))

    def draw_line_strip(self, points: np.ndarray, color: Color) -> None:
        pts = np.asarray(points)
        if len(pts) == 0:
            return
        self.ax.plot(pts[:, 0], pts[:, 1], color=color.rgb, linewidth=1.0,
                     zorder=self._next_zorder())

    def save(self, path: Union[str, Path], dpi: Optional[int] = 100) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.fig.savefig(path, dpi=dpi, facecolor=self.fig.get_facecolor())
        return path

    def close(self):
        plt.close(self.fig)
