"""Error taxonomy for the hyperbolic kernel.

Every error derives from HyperbolicError and from the builtin exception
that best describes it, so callers can catch either.
"""


class HyperbolicError(Exception):
    """Base class for hyperbolic kernel errors."""


class OutsideDiskError(HyperbolicError, ValueError):
    """A planar coordinate lies on or outside the unit disk."""

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y
        super().__init__(
            f"Point ({x:.6g}, {y:.6g}) is outside the Poincare disk "
            f"(x^2 + y^2 = {x * x + y * y:.6g} >= 1)"
        )


class NotOnHyperboloidError(HyperbolicError, ValueError):
    """A raw position cannot be projected onto the upper sheet."""


class DegenerateDirectionError(HyperbolicError, ValueError):
    """A direction has no spacelike length to normalize."""


class DegenerateQueryError(HyperbolicError, ArithmeticError):
    """Distance/direction asked between coincident points."""


class UnwiredEntityError(HyperbolicError, RuntimeError):
    """An entity was realigned before its peer was wired."""


class GeodesicOverflowError(HyperbolicError, OverflowError):
    """A geodesic step leaves the range of float64 coordinates."""
