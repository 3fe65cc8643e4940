"""Drawable figures built on the hyperbolic kernel.

- HyperbolicDisk: geodesic circle, sampled into a triangle fan
- PlanarDisk: Euclidean circle (the Poincare disk background)
- Trail: breadcrumb line strip
- AlignedEntity: body + eyes + mouth, eyes tracking a peer
"""

from .disk import HyperbolicDisk, PlanarDisk, DEFAULT_SAMPLES, DEFAULT_MAX_REACH
from .trail import Trail
from .entity import AlignedEntity, MouthOscillator, wire_peers, gaze_error

__all__ = [
    "HyperbolicDisk",
    "PlanarDisk",
    "DEFAULT_SAMPLES",
    "DEFAULT_MAX_REACH",
    "Trail",
    "AlignedEntity",
    "MouthOscillator",
    "wire_peers",
    "gaze_error",
]
