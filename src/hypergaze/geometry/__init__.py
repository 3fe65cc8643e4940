"""Hyperbolic plane kernel on the hyperboloid model.

Key concepts:
- Lorentz helpers: the (+, +, -) inner product, its cross product and
  the invariant-correction step that projects drifted vectors back
- HyperbolicPoint: a position with a unit tangent heading; supports
  geodesic motion, rotation and distance/bearing queries
- Poincare disk conversion for display
"""

from .errors import (
    HyperbolicError,
    OutsideDiskError,
    NotOnHyperboloidError,
    DegenerateDirectionError,
    DegenerateQueryError,
    GeodesicOverflowError,
    UnwiredEntityError,
)
from .lorentz import (
    lorentz_dot,
    lorentz_norm,
    lorentz_normalize,
    lorentz_cross,
    point_lambda,
    vector_lambda,
    correct_position_and_direction,
    lift_to_hyperboloid,
    project_to_disk,
)
from .point import HyperbolicPoint, Bearing, DEGENERATE_EPSILON

__all__ = [
    "HyperbolicError",
    "OutsideDiskError",
    "NotOnHyperboloidError",
    "DegenerateDirectionError",
    "DegenerateQueryError",
    "GeodesicOverflowError",
    "UnwiredEntityError",
    "lorentz_dot",
    "lorentz_norm",
    "lorentz_normalize",
    "lorentz_cross",
    "point_lambda",
    "vector_lambda",
    "correct_position_and_direction",
    "lift_to_hyperboloid",
    "project_to_disk",
    "HyperbolicPoint",
    "Bearing",
    "DEGENERATE_EPSILON",
]
