"""hypergaze - gaze-tracking figures on the hyperbolic plane.

A hyperboloid-model geometry kernel (points with headings, geodesic
motion, rotation, distance and bearing queries) and the figures built
on it: geodesic disks, trails, and entities whose eyes follow a peer.
Output is Poincare disk coordinates for an injected renderer.
"""

from .geometry import HyperbolicPoint, HyperbolicError
from .figures import AlignedEntity, HyperbolicDisk, Trail
from .engine import SimulationConfig, SimulationEngine, build_scene

__version__ = "0.1.0"

__all__ = [
    "HyperbolicPoint",
    "HyperbolicError",
    "AlignedEntity",
    "HyperbolicDisk",
    "Trail",
    "SimulationConfig",
    "SimulationEngine",
    "build_scene",
]
