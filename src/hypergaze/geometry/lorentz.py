"""Vector helpers for the hyperboloid model.

Vectors are numpy arrays of shape (3,). Two bilinear forms live on the
same representation:

- the Euclidean dot product (np.dot), used for planar geometry
- the Lorentz form <a, b> = a.x*b.x + a.y*b.y - a.z*b.z, used for
  everything on the hyperboloid

The hyperbolic plane is the sheet <p, p> = -1, p.z > 0. A tangent
direction v at p satisfies <p, v> = 0 and <v, v> = 1.
"""

from typing import Sequence, Tuple
import math

import numpy as np

from .errors import DegenerateDirectionError, NotOnHyperboloidError, OutsideDiskError

# Metric signature (+, +, -)
LORENTZ_METRIC = np.array([1.0, 1.0, -1.0])


def as_vector(v: Sequence[float]) -> np.ndarray:
    """Coerce a 3-sequence into a float64 vector (always a fresh copy)."""
    arr = np.array(v, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def lorentz_dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[0] + a[1] * b[1] - a[2] * b[2])


def lorentz_norm(v: np.ndarray) -> float:
    """Lorentz length of a spacelike vector."""
    sq = lorentz_dot(v, v)
    if sq <= 0.0:
        raise DegenerateDirectionError(
            f"Vector {v.tolist()} is not spacelike (<v, v> = {sq:.6g})"
        )
    return math.sqrt(sq)


def lorentz_normalize(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """Scale a spacelike vector to unit Lorentz length."""
    sq = lorentz_dot(v, v)
    if not math.isfinite(sq) or sq <= eps:
        raise DegenerateDirectionError(
            f"Cannot normalize {v.tolist()} (<v, v> = {sq:.6g})"
        )
    return v / math.sqrt(sq)


def lorentz_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Cross product adapted to the Lorentz metric.

    The Euclidean cross product of J*a and J*b, with J = diag(1, 1, -1).
    The result is Lorentz-orthogonal to both a and b, which is what the
    rotation of a tangent direction about its base point needs.
    """
    return np.cross(a * LORENTZ_METRIC, b * LORENTZ_METRIC)


def point_lambda(p: np.ndarray) -> float:
    """Scale factor pulling p back onto <p, p> = -1."""
    sq = lorentz_dot(p, p)
    if not sq < 0.0:
        raise NotOnHyperboloidError(
            f"Position {p.tolist()} is not timelike (<p, p> = {sq:.6g})"
        )
    return math.sqrt(-1.0 / sq)


def vector_lambda(v: np.ndarray, p: np.ndarray) -> float:
    """Coefficient c such that v + c*p is Lorentz-orthogonal to p."""
    return lorentz_dot(v, p) / (p[2] * p[2] - p[0] * p[0] - p[1] * p[1])


def correct_position_and_direction(
    p: np.ndarray,
    v: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Project an approximate (point, direction) pair back onto the manifold.

    The point is rescaled onto the hyperboloid, then the direction is
    re-orthogonalized against the corrected point. The direction is not
    normalized here; callers normalize once they are done composing.
    """
    p = p * point_lambda(p)
    v = v + p * vector_lambda(v, p)
    return p, v


def lift_to_hyperboloid(x: float, y: float) -> np.ndarray:
    """Poincare disk (x, y) -> hyperboloid.

    Exact inverse of project_to_disk: (2x, 2y, 1 + r^2) / (1 - r^2).
    At the disk center this agrees with the (x, y, 1) / sqrt(1 - r^2)
    lift, which is the Klein model's lift and does not round-trip.
    """
    x = float(x)
    y = float(y)
    r2 = x * x + y * y
    if not r2 < 1.0:
        raise OutsideDiskError(x, y)
    return np.array([2.0 * x, 2.0 * y, 1.0 + r2]) / (1.0 - r2)


def project_to_disk(p: np.ndarray) -> Tuple[float, float]:
    """Hyperboloid -> Poincare disk."""
    denom = p[2] + 1.0
    return float(p[0] / denom), float(p[1] / denom)
