"""Points with a heading on the hyperboloid model of the hyperbolic plane.

A HyperbolicPoint is a (position, direction) pair:

- position lies on the upper sheet: <p, p> = -1, p.z > 0
- direction is a unit tangent at position: <v, v> = 1, <p, v> = 0

Every way of building or mutating a point goes through the
invariant-correction step, so floating-point drift from long chains of
geodesic moves and rotations is projected away after each operation
instead of accumulating.

Typical use:

    p = HyperbolicPoint.origin()          # disk center, heading +y
    q = p.advance(1.0)                     # follow the geodesic
    q.rotate(math.pi / 2)                  # turn left in place
    dist, heading = q.distance_and_direction(p)
"""

from typing import NamedTuple, Sequence, Tuple
import math

import numpy as np

from .errors import (
    DegenerateDirectionError,
    DegenerateQueryError,
    GeodesicOverflowError,
    NotOnHyperboloidError,
)
from .lorentz import (
    as_vector,
    correct_position_and_direction,
    lift_to_hyperboloid,
    lorentz_cross,
    lorentz_dot,
    lorentz_normalize,
    project_to_disk,
    vector_lambda,
)

# Below this distance two points count as coincident for bearing queries
DEGENERATE_EPSILON = 1e-7

DEFAULT_DIRECTION = (0.0, 1.0, 0.0)


class Bearing(NamedTuple):
    """Result of a distance/direction query."""
    distance: float
    direction: np.ndarray   # Unit tangent at the query origin, or zeros

    @property
    def degenerate(self) -> bool:
        return self.distance == 0.0


class HyperbolicPoint:
    """A position on the hyperboloid together with a tangent heading."""

    __slots__ = ("_position", "_direction")

    def __init__(self, position: Sequence[float], direction: Sequence[float] = DEFAULT_DIRECTION):
        """Build a point from approximate raw vectors.

        The direction is only a guess: it is re-orthogonalized against
        the (corrected) position and normalized.

        Raises:
            NotOnHyperboloidError: position is non-finite, has z <= 0 or
                is not timelike
            DegenerateDirectionError: direction has no tangent component
        """
        p = as_vector(position)
        v = as_vector(direction)
        if not np.all(np.isfinite(p)) or p[2] <= 0.0:
            raise NotOnHyperboloidError(
                f"Position {p.tolist()} is not on the upper hyperboloid sheet"
            )
        if not np.all(np.isfinite(v)):
            raise DegenerateDirectionError(f"Direction {v.tolist()} is not finite")
        p, v = correct_position_and_direction(p, v)
        self._position = p
        self._direction = lorentz_normalize(v)

    @classmethod
    def _raw(cls, position: np.ndarray, direction: np.ndarray) -> "HyperbolicPoint":
        point = cls.__new__(cls)
        point._position = position.copy()
        point._direction = direction.copy()
        return point

    @classmethod
    def origin(cls, direction: Sequence[float] = DEFAULT_DIRECTION) -> "HyperbolicPoint":
        """The hyperboloid vertex (0, 0, 1), i.e. the disk center."""
        return cls((0.0, 0.0, 1.0), direction)

    @classmethod
    def from_plane(
        cls,
        xy: Sequence[float],
        direction: Sequence[float] = DEFAULT_DIRECTION,
    ) -> "HyperbolicPoint":
        """Lift a Poincare disk coordinate onto the hyperboloid.

        Raises:
            OutsideDiskError: x^2 + y^2 >= 1
        """
        x, y = xy
        return cls(lift_to_hyperboloid(x, y), direction)

    @property
    def position(self) -> np.ndarray:
        view = self._position.view()
        view.flags.writeable = False
        return view

    @property
    def direction(self) -> np.ndarray:
        view = self._direction.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "HyperbolicPoint":
        return HyperbolicPoint._raw(self._position, self._direction)

    def to_plane(self) -> Tuple[float, float]:
        """Poincare disk coordinate of the position."""
        return project_to_disk(self._position)

    def advance(self, t: float) -> "HyperbolicPoint":
        """Follow the geodesic along the heading for arc length t.

        Negative t moves backward. The heading is transported along the
        geodesic, so advancing twice equals advancing once by the sum.

        Raises:
            GeodesicOverflowError: the result does not fit in float64
            NotOnHyperboloidError: the result is too far out for the
                correction step to recover
        """
        if not math.isfinite(t):
            raise ValueError(f"Advance distance must be finite, got {t}")
        try:
            ch = math.cosh(t)
            sh = math.sinh(t)
        except OverflowError:
            raise GeodesicOverflowError(f"Advance distance {t} overflows float64") from None
        p = self._position * ch + self._direction * sh
        v = self._position * sh + self._direction * ch
        if not (np.all(np.isfinite(p)) and np.all(np.isfinite(v))):
            raise GeodesicOverflowError(f"Advancing {t} from {self!r} overflows float64")
        return HyperbolicPoint(p, v)

    def rotate(self, angle: float) -> None:
        """Turn the heading in place by angle (radians, positive = left)."""
        if not math.isfinite(angle):
            raise ValueError(f"Rotation angle must be finite, got {angle}")
        p = self._position
        v = lorentz_normalize(self._direction)
        perp = lorentz_normalize(lorentz_cross(v, p))
        v = lorentz_normalize(v * math.cos(angle) + perp * math.sin(angle))
        v = v + p * vector_lambda(v, p)
        self._direction = lorentz_normalize(v)

    def rotated(self, angle: float) -> "HyperbolicPoint":
        point = self.copy()
        point.rotate(angle)
        return point

    def advance_rotated(self, distance: float, angle: float) -> "HyperbolicPoint":
        """Point at the given distance along the heading turned by angle.

        Used to sample circle boundaries and to place satellites at a
        bearing. The receiver is not modified.
        """
        return self.rotated(angle).advance(distance)

    def set_direction(self, direction: Sequence[float]) -> None:
        """Replace the heading; the new one is corrected and normalized."""
        v = as_vector(direction)
        if not np.all(np.isfinite(v)):
            raise DegenerateDirectionError(f"Direction {v.tolist()} is not finite")
        v = v + self._position * vector_lambda(v, self._position)
        self._direction = lorentz_normalize(v)

    def lateral_direction(self) -> np.ndarray:
        """The planar part of the heading, Euclidean-normalized, as (x, y, 0).

        This is a reference heading that ignores the hyperboloid's
        z-coordinate. It is not tangent at points away from the origin;
        set_direction projects it when it is applied.
        """
        planar = self._direction[:2]
        norm = float(np.hypot(planar[0], planar[1]))
        if norm == 0.0:
            raise DegenerateDirectionError(
                f"Heading {self._direction.tolist()} has no planar component"
            )
        return np.array([planar[0] / norm, planar[1] / norm, 0.0])

    def distance_to(self, other: "HyperbolicPoint") -> float:
        # Drift can push the argument just below 1
        return math.acosh(max(1.0, -lorentz_dot(other._position, self._position)))

    def distance_and_direction(self, other: "HyperbolicPoint", strict: bool = False) -> Bearing:
        """Hyperbolic distance to other and the unit heading here toward it.

        For coincident points (distance below DEGENERATE_EPSILON) the
        heading is undefined: a zero distance and zero vector are
        returned, or DegenerateQueryError is raised when strict is set.
        """
        dist = self.distance_to(other)
        if dist < DEGENERATE_EPSILON:
            if strict:
                raise DegenerateQueryError(
                    f"Bearing between coincident points {self.to_plane()} "
                    f"and {other.to_plane()} is undefined"
                )
            return Bearing(0.0, np.zeros(3))
        direction = (other._position - self._position * math.cosh(dist)) / math.sinh(dist)
        return Bearing(dist, direction)

    def invariant_residuals(self) -> Tuple[float, float, float]:
        """Absolute errors of <p,p> = -1, <v,v> = 1 and <p,v> = 0."""
        p = self._position
        v = self._direction
        return (
            abs(lorentz_dot(p, p) + 1.0),
            abs(lorentz_dot(v, v) - 1.0),
            abs(lorentz_dot(p, v)),
        )

    @property
    def max_residual(self) -> float:
        return max(self.invariant_residuals())

    def __repr__(self) -> str:
        x, y = self.to_plane()
        return (
            f"HyperbolicPoint(plane=({x:.4f}, {y:.4f}), "
            f"direction={np.round(self._direction, 4).tolist()})"
        )
