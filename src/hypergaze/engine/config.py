"""Configuration for the hypergaze simulation."""

from dataclasses import dataclass, field
from typing import Dict
import math


def _default_key_bindings() -> Dict[str, str]:
    return {
        "e": "move_forward",
        "d": "move_backward",
        "s": "rotate_right",
        "f": "rotate_left",
    }


@dataclass
class SimulationConfig:
    """Configuration for the two-entity simulation.

    Distances are hyperbolic arc lengths, angles are radians. The
    defaults reproduce the classic scene: two round bodies with eyes
    that track each other, one steered from the keyboard and one
    circling on autopilot.
    """

    # Frame pacing
    framerate: int = 60                  # Simulation ticks per second
    move_speed: float = 0.02             # Arc length per tick while moving
    rot_speed: float = 0.05              # Radians per tick while turning

    # Figure geometry
    body_radius: float = 0.2
    eye_radius: float = 0.05
    pupil_radius: float = 0.03
    mouth_radius: float = 0.1            # Also the breathing maximum
    eye_offset: float = 0.6              # Angle between heading and each eye
    boundary_samples: int = 100          # Boundary vertices per disk

    # Mouth breathing
    mouth_step: float = 0.005            # Radius change per tick

    # Second entity's opening move
    initial_turn: float = math.pi / 2    # Rotated right by this much
    initial_advance: float = 1.0         # Then moved forward by this much

    # Bodies refuse moves that end farther than this from the origin
    max_reach: float = 10.0

    # Diagnostics
    drift_warning: float = 1e-6          # Log when an invariant residual exceeds this

    # Keyboard key -> intent name
    key_bindings: Dict[str, str] = field(default_factory=_default_key_bindings)

    def __post_init__(self):
        if self.framerate <= 0:
            raise ValueError(f"framerate must be positive, got {self.framerate}")
        if self.framerate > 1000:
            raise ValueError(f"framerate above 1000 Hz is not supported, got {self.framerate}")
        for name in ("move_speed", "rot_speed", "body_radius", "eye_radius",
                     "pupil_radius", "mouth_radius", "mouth_step", "max_reach"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.boundary_samples < 3:
            raise ValueError(f"boundary_samples must be >= 3, got {self.boundary_samples}")

    @property
    def frame_ms(self) -> int:
        """Whole milliseconds per tick (16 at 60 Hz)."""
        return 1000 // self.framerate

    @classmethod
    def for_testing(cls) -> "SimulationConfig":
        """Coarse boundaries so tests stay fast."""
        return cls(boundary_samples=12)
