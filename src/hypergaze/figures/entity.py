"""Composite figures whose eyes follow a peer.

An AlignedEntity is a body disk with four satellites (two eyes, each with
a pupil) and a mouth. The body is the only moving part that carries
state; satellites are re-placed from scratch on every realign():

1. Start from the body center with its planar (lateral) heading
2. Turn left by eye_offset, step out by the body radius: left eye
3. Aim the eye at the peer's body, step the pupil toward it
4. Same on the right with -eye_offset
5. Back to the heading, step out by the body radius: mouth

Two entities reference each other as peers. The reference is
non-owning and wired after both exist (see wire_peers).
"""

from typing import List, Optional, Tuple
import logging
import math

from ..geometry import HyperbolicPoint, UnwiredEntityError, lorentz_dot
from ..render import BLACK, WHITE, Color, RenderTarget
from .disk import DEFAULT_MAX_REACH, DEFAULT_SAMPLES, HyperbolicDisk
from .trail import Trail

logger = logging.getLogger(__name__)

PUPIL_COLOR = Color(0.0, 0.0, 1.0)


class MouthOscillator:
    """Bounded breathing oscillator for the mouth radius.

    Each tick moves the radius one step toward the current bound; when a
    bound is reached the radius is clamped to it and the direction flips.
    """

    def __init__(self, maximum: float, step: float, radius: Optional[float] = None, closing: bool = True):
        if maximum <= 0 or step <= 0:
            raise ValueError("Oscillator maximum and step must be positive")
        self.maximum = maximum
        self.step = step
        self.radius = maximum if radius is None else min(max(radius, 0.0), maximum)
        self.closing = closing
        self._tolerance = step * 1e-6

    def tick(self) -> float:
        self.radius += -self.step if self.closing else self.step
        if self.radius <= self._tolerance:
            self.radius = 0.0
            self.closing = False
        elif self.radius >= self.maximum - self._tolerance:
            self.radius = self.maximum
            self.closing = True
        return self.radius


class AlignedEntity:
    """A body with gaze-tracking eyes and a breathing mouth."""

    def __init__(
        self,
        color: Color,
        name: str = "",
        body_radius: float = 0.2,
        eye_radius: float = 0.05,
        pupil_radius: float = 0.03,
        mouth_radius: float = 0.1,
        mouth_step: float = 0.005,
        eye_offset: float = 0.6,
        samples: int = DEFAULT_SAMPLES,
        max_reach: float = DEFAULT_MAX_REACH,
        start: Optional[HyperbolicPoint] = None,
    ):
        self.name = name
        self.eye_offset = eye_offset
        start = start or HyperbolicPoint.origin()

        self.body = HyperbolicDisk(body_radius, start, color, samples, max_reach)
        # Left eye, right eye, left pupil, right pupil
        self.eyes: Tuple[HyperbolicDisk, ...] = (
            HyperbolicDisk(eye_radius, start, WHITE, samples),
            HyperbolicDisk(eye_radius, start, WHITE, samples),
            HyperbolicDisk(pupil_radius, start, PUPIL_COLOR, samples),
            HyperbolicDisk(pupil_radius, start, PUPIL_COLOR, samples),
        )
        self.mouth = HyperbolicDisk(mouth_radius, start, BLACK, samples)
        self.mouth_oscillator = MouthOscillator(mouth_radius, mouth_step)
        self.trail = Trail()
        self.peer: Optional["AlignedEntity"] = None

    def set_peer(self, other: "AlignedEntity"):
        if other is self:
            raise ValueError(f"Entity {self.name!r} cannot be its own peer")
        self.peer = other

    @property
    def satellites(self) -> List[HyperbolicDisk]:
        return [*self.eyes, self.mouth]

    @property
    def position(self) -> Tuple[float, float]:
        return self.body.planar_center

    def realign(self):
        """Re-place eyes, pupils and mouth around the body.

        Reads the peer's current body center; never mutates the peer.

        Raises:
            UnwiredEntityError: no peer has been set
        """
        if self.peer is None:
            raise UnwiredEntityError(f"Entity {self.name!r} has no peer to look at")
        target = self.peer.body.center
        radius = self.body.radius

        anchor = self.body.center
        anchor.set_direction(anchor.lateral_direction())

        anchor.rotate(self.eye_offset)
        self._place_eye(anchor.advance(radius), self.eyes[0], self.eyes[2], target)

        anchor.rotate(-2.0 * self.eye_offset)
        self._place_eye(anchor.advance(radius), self.eyes[1], self.eyes[3], target)

        anchor.rotate(self.eye_offset)
        self.mouth.set_center(anchor.advance(radius))
        self.mouth.recompute()

    def _place_eye(
        self,
        eye_point: HyperbolicPoint,
        eye: HyperbolicDisk,
        pupil: HyperbolicDisk,
        target: HyperbolicPoint,
    ):
        bearing = eye_point.distance_and_direction(target)
        if bearing.degenerate:
            logger.debug("%s: eye coincides with peer, keeping rim heading", self.name)
        else:
            eye_point.set_direction(bearing.direction)
        eye.set_center(eye_point)
        # Half-pupil inset keeps the pupil visibly inside the eye
        pupil.set_center(eye_point.advance(eye.radius - pupil.radius / 2.0))
        eye.recompute()
        pupil.recompute()

    def move_forward(self, amount: float) -> bool:
        return self.body.move_forward(amount)

    def move_backward(self, amount: float) -> bool:
        return self.body.move_backward(amount)

    def rotate_left(self, angle: float):
        self.body.rotate_left(angle)

    def rotate_right(self, angle: float):
        self.body.rotate_right(angle)

    def append_trail_point(self):
        self.trail.append(self.body.planar_center)

    def breathe(self) -> float:
        """Advance the mouth oscillator by one tick."""
        radius = self.mouth_oscillator.tick()
        self.mouth.set_radius(radius)
        return radius

    def draw(self, target: RenderTarget, realign: bool = True):
        if realign:
            self.realign()
        self.trail.draw(target)
        self.body.draw(target)
        self.mouth.draw(target)
        for eye in self.eyes:
            eye.draw(target)

    def __repr__(self) -> str:
        x, y = self.position
        peer = self.peer.name if self.peer is not None else None
        return f"AlignedEntity(name={self.name!r}, position=({x:.4f}, {y:.4f}), peer={peer!r})"


def wire_peers(first: AlignedEntity, second: AlignedEntity):
    """Make two entities look at each other."""
    first.set_peer(second)
    second.set_peer(first)
    logger.debug("Wired %r <-> %r", first.name, second.name)


def gaze_error(entity: AlignedEntity, eye_index: int) -> float:
    """Angle (radians) between an eye's heading and its bearing to the peer."""
    if entity.peer is None:
        raise UnwiredEntityError(f"Entity {entity.name!r} has no peer")
    eye = entity.eyes[eye_index].center
    bearing = eye.distance_and_direction(entity.peer.body.center)
    if bearing.degenerate:
        return 0.0
    # Chord between the unit headings, precise for nearly equal vectors
    diff = eye.direction - bearing.direction
    chord = math.sqrt(max(0.0, lorentz_dot(diff, diff)))
    return 2.0 * math.asin(min(1.0, chord / 2.0))
